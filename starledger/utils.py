import hashlib
import json
import time
from typing import Any


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def json_dumps(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"))


def now_ts() -> int:
    return int(time.time())


def encode_body(payload: Any) -> str:
    return json_dumps(payload).encode().hex()


def decode_body(body: str) -> Any:
    return json.loads(bytes.fromhex(body).decode())
