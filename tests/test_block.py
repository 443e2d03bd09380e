from starledger.block import Block


def _committed(payload=None) -> Block:
    block = Block.create(payload if payload is not None else {"story": "test"})
    block.height = 3
    block.time = 1700000000
    block.previous_block_hash = "ab" * 32
    block.hash = block.compute_hash()
    return block


def test_hash_ignores_stored_hash():
    block = _committed()
    expected = block.compute_hash()
    block.hash = "ff" * 32
    assert block.compute_hash() == expected
    assert not block.validate()


def test_any_field_change_breaks_validation():
    for field, value in (
        ("height", 4),
        ("time", 1700000001),
        ("previous_block_hash", "cd" * 32),
        ("body", Block.create({"story": "forged"}).body),
    ):
        block = _committed()
        assert block.validate()
        setattr(block, field, value)
        assert not block.validate(), field


def test_body_is_hex_json():
    block = _committed({"story": "test", "dec": "68° 52' 56.9"})
    int(block.body, 16)
    assert block.decode_body() == {"story": "test", "dec": "68° 52' 56.9"}
    assert Block.create({}).decode_body() == {}


def test_dict_round_trip_reverifies():
    block = _committed()
    data = block.to_dict()
    assert set(data) == {"hash", "height", "body", "time", "previousBlockHash"}
    restored = Block.from_dict(data)
    assert restored == block
    assert restored.validate()


def test_genesis_dict_has_empty_previous_hash():
    restored = Block.from_dict({"body": Block.create({}).body, "height": 0, "time": 1, "previousBlockHash": None})
    assert restored.previous_block_hash == ""
