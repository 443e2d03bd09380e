import pytest

import starledger.chain as chain_mod
from starledger.chain import Chain
from starledger.wallet import Wallet

T0 = 1_700_000_000


class FakeClock:
    def __init__(self, now: int) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    fake = FakeClock(T0)
    monkeypatch.setattr(chain_mod, "now_ts", fake)
    return fake


@pytest.fixture
def chain(clock):
    return Chain()


@pytest.fixture
def wallet():
    return Wallet.create()


@pytest.fixture
def claim(chain, wallet):
    """Submit a correctly signed star for ``wallet`` and return the block."""

    def _claim(star):
        message = chain.request_challenge(wallet.address)
        signature = wallet.sign_message(message)
        return chain.submit_claim(wallet.address, message, signature, star)

    return _claim
