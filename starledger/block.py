from dataclasses import dataclass, replace
from typing import Any

from .utils import decode_body, encode_body, json_dumps, sha256


@dataclass
class Block:
    body: str
    height: int = 0
    time: int = 0
    previous_block_hash: str = ""
    hash: str = ""

    @staticmethod
    def create(payload: Any) -> "Block":
        """Build an uncommitted block; the chain stamps the remaining fields."""
        return Block(body=encode_body(payload))

    def to_dict(self) -> dict:
        return {
            "hash": self.hash,
            "height": self.height,
            "body": self.body,
            "time": self.time,
            "previousBlockHash": self.previous_block_hash,
        }

    @staticmethod
    def from_dict(data: dict) -> "Block":
        return Block(
            body=str(data["body"]),
            height=int(data["height"]),
            time=int(data["time"]),
            previous_block_hash=str(data.get("previousBlockHash") or ""),
            hash=str(data.get("hash", "")),
        )

    def compute_hash(self) -> str:
        blank = replace(self, hash="")
        return sha256(json_dumps(blank.to_dict()).encode())

    def validate(self) -> bool:
        return self.compute_hash() == self.hash

    def decode_body(self) -> Any:
        return decode_body(self.body)
