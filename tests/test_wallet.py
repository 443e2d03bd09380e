import pytest

from starledger import crypto
from starledger.wallet import Wallet


def test_wallet_save_load(tmp_path):
    wallet = Wallet.create()
    path = tmp_path / "wallet.json"
    wallet.save(str(path))
    loaded = Wallet.load(str(path))
    assert loaded.address == wallet.address

    message = f"{wallet.address}:1700000000:starRegistry"
    assert crypto.verify_message(message, wallet.address, loaded.sign_message(message))


def test_wallet_from_private_scalar_only():
    source = Wallet.create()
    loaded = Wallet.from_dict({"private_key": {"d": hex(source.priv["d"])}})
    assert loaded.priv == {"d": source.priv["d"]}
    assert loaded.address == source.address

    message = f"{loaded.address}:1700000000:starRegistry"
    assert crypto.verify_message(message, source.address, loaded.sign_message(message))


def test_wallet_from_dict_rejects_other_algos():
    with pytest.raises(ValueError):
        Wallet.from_dict({"algo": "rsa", "private_key": {"d": "0x1"}})
    with pytest.raises(ValueError):
        Wallet.from_dict({"algo": "ecdsa"})
