import threading

from starledger.chain import Chain


def test_parallel_claims_get_unique_heights():
    chain = Chain(verifier=lambda message, address, signature: True)
    workers = 8
    per_worker = 25
    barrier = threading.Barrier(workers)
    failures = []

    def submit(worker: int) -> None:
        address = f"addr{worker}"
        barrier.wait()
        for i in range(per_worker):
            try:
                message = chain.request_challenge(address)
                chain.submit_claim(address, message, "sig", {"worker": worker, "n": i})
            except Exception as exc:  # collected and asserted below
                failures.append(exc)

    threads = [threading.Thread(target=submit, args=(w,)) for w in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert failures == []
    total = workers * per_worker
    assert chain.height == total + 1
    assert sorted(chain.hash_to_height.values()) == list(range(total + 1))
    owned = sorted(h for w in range(workers) for h in chain.get_heights_by_address(f"addr{w}"))
    assert owned == list(range(1, total + 1))
    for w in range(workers):
        assert [p["n"] for p in chain.get_payloads_by_address(f"addr{w}")] == list(range(per_worker))
    assert chain.validate_chain() == []


def test_reads_see_indexed_blocks_during_claims():
    chain = Chain(verifier=lambda message, address, signature: True)
    done = threading.Event()
    mismatches = []
    reads = []

    def read() -> None:
        while True:
            block = chain.get_block_by_height(chain.height - 1)
            if block is None or chain.get_block_by_hash(block.hash) is not block:
                mismatches.append(block)
            reads.append(1)
            if done.is_set():
                return

    reader = threading.Thread(target=read)
    reader.start()
    try:
        for i in range(300):
            message = chain.request_challenge("addr")
            chain.submit_claim("addr", message, "sig", {"n": i})
    finally:
        done.set()
        reader.join()

    assert reads
    assert mismatches == []
    assert chain.height == 301
    assert chain.validate_chain() == []
