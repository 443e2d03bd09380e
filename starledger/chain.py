import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from . import crypto
from .block import Block
from .config import CHALLENGE_TAG, CHALLENGE_TTL, GENESIS_PREV
from .errors import (
    AddressMismatch,
    ChallengeExpired,
    ClaimRejected,
    InvalidTimestamp,
    MalformedMessage,
    SignatureInvalid,
)
from .utils import now_ts

logger = logging.getLogger(__name__)

Verifier = Callable[[str, str, str], bool]


def challenge_message(address: str) -> str:
    """Message a wallet signs to prove it owns ``address``; no chain state involved."""
    return f"{address}:{now_ts()}:{CHALLENGE_TAG}"


class Chain:
    """In-memory star registry.

    Blocks live in ``self.chain`` (position == height) and are only ever
    appended through ``_add_block``. ``hash_to_height`` and
    ``address_to_heights`` are derived indices kept in step with it under
    ``self.lock``; every public read takes the same lock so it never sees a
    block whose index entries are still missing.
    """

    def __init__(self, verifier: Optional[Verifier] = None, challenge_ttl: Optional[int] = None):
        self.chain: List[Block] = []
        self.hash_to_height: Dict[str, int] = {}
        self.address_to_heights: Dict[str, List[int]] = {}
        self.verifier: Verifier = verifier or crypto.verify_message
        self.challenge_ttl = CHALLENGE_TTL if challenge_ttl is None else int(challenge_ttl)
        self.lock = threading.RLock()
        self._init_genesis()

    def _init_genesis(self) -> None:
        with self.lock:
            if not self.chain:
                block = self._add_block(Block.create({}))
                logger.info("genesis block created hash=%s", block.hash)

    @property
    def height(self) -> int:
        with self.lock:
            return len(self.chain)

    def get_height(self) -> int:
        return self.height

    def _add_block(self, block: Block) -> Block:
        with self.lock:
            block.height = len(self.chain)
            block.time = now_ts()
            if block.height > 0:
                block.previous_block_hash = self.chain[block.height - 1].hash
            else:
                block.previous_block_hash = GENESIS_PREV
            block.hash = ""
            block.hash = block.compute_hash()

            self.chain.append(block)
            self.hash_to_height[block.hash] = block.height
            logger.debug("committed block height=%d hash=%s", block.height, block.hash)
            return block

    def get_block_by_height(self, height: int) -> Optional[Block]:
        if isinstance(height, bool) or not isinstance(height, int):
            return None
        with self.lock:
            if 0 <= height < len(self.chain):
                return self.chain[height]
        return None

    def get_block_by_hash(self, block_hash: str) -> Optional[Block]:
        with self.lock:
            height = self.hash_to_height.get(block_hash)
            if height is None:
                return None
            return self.get_block_by_height(height)

    def get_heights_by_address(self, address: str) -> List[int]:
        with self.lock:
            return list(self.address_to_heights.get(address, []))

    def request_challenge(self, address: str) -> str:
        return challenge_message(address)

    def _check_claim(self, address: str, message: str, signature: str) -> None:
        parts = message.split(":")
        if len(parts) != 3 or parts[2] != CHALLENGE_TAG:
            raise MalformedMessage()
        message_address, ts_text, _ = parts
        if message_address != address:
            raise AddressMismatch()
        if not (ts_text.isascii() and ts_text.isdigit()) or int(ts_text) <= 0:
            raise InvalidTimestamp()
        # a clock that moved backwards yields a negative elapsed time, which is accepted
        elapsed = now_ts() - int(ts_text)
        if elapsed >= self.challenge_ttl:
            raise ChallengeExpired()
        if not self.verifier(message, address, signature):
            raise SignatureInvalid()

    def submit_claim(self, address: str, message: str, signature: str, payload: Any) -> Block:
        try:
            self._check_claim(address, message, signature)
        except ClaimRejected as exc:
            logger.info("claim for %s rejected: %s", address, exc)
            raise
        block = Block.create(payload)
        with self.lock:
            block = self._add_block(block)
            self.address_to_heights.setdefault(address, []).append(block.height)
        logger.info("claim for %s committed at height %d", address, block.height)
        return block

    def get_payloads_by_address(self, address: str) -> List[Any]:
        with self.lock:
            blocks = [self.chain[h] for h in self.address_to_heights.get(address, [])]
        return [block.decode_body() for block in blocks]

    def validate_block(self, height: int) -> bool:
        block = self.get_block_by_height(height)
        if block is None:
            return False
        return block.validate()

    def validate_chain(self) -> List[str]:
        """Check every block's own hash and its link to the block before it.

        Returns human readable diagnostics; an empty list means no tampering
        or broken link was found anywhere in ``[0, height - 1]``.
        """
        errors: List[str] = []
        with self.lock:
            blocks = list(self.chain)
        previous_hash = GENESIS_PREV
        for i, block in enumerate(blocks):
            if not block.validate():
                errors.append(f"block #{i} is invalid")
            if block.previous_block_hash != previous_hash:
                errors.append(f"chain broke at block #{i}")
            previous_hash = block.hash
        for err in errors:
            logger.warning("chain validation: %s", err)
        return errors

    def dump_chain(self) -> List[dict]:
        with self.lock:
            return [block.to_dict() for block in self.chain]

    def metrics(self) -> dict:
        with self.lock:
            return {
                "height": len(self.chain),
                "addresses": len(self.address_to_heights),
                "claims": sum(len(h) for h in self.address_to_heights.values()),
                "tip": self.chain[-1].hash,
            }
