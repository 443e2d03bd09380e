import base64
import binascii
from typing import Dict, Tuple

try:
    from cryptography.exceptions import InvalidSignature
    from cryptography.hazmat.primitives import hashes, serialization
    from cryptography.hazmat.primitives.asymmetric import ec
    from cryptography.hazmat.primitives.asymmetric.utils import (
        decode_dss_signature,
        encode_dss_signature,
        Prehashed,
    )
except ImportError as exc:  # pragma: no cover - hard fail when dependency missing
    raise ImportError(
        "cryptography is required. Install with `python3 -m pip install cryptography`."
    ) from exc

from .utils import sha256

CURVE = ec.SECP256K1()
# secp256k1 order (for low-s normalization)
N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

POINT_SIZE = 33
SCALAR_SIZE = 32
SIGNATURE_SIZE = POINT_SIZE + 2 * SCALAR_SIZE


def _low_s(s: int) -> int:
    return N - s if s > N // 2 else s


def _message_digest(message: str) -> bytes:
    return bytes.fromhex(sha256(message.encode("utf-8")))


def generate_keypair() -> Dict[str, int]:
    key = ec.generate_private_key(CURVE)
    nums = key.private_numbers()
    return {"d": nums.private_value, "x": nums.public_numbers.x, "y": nums.public_numbers.y}


def public_key(priv: Dict[str, int]) -> Dict[str, int]:
    if "x" in priv and "y" in priv:
        return {"x": priv["x"], "y": priv["y"]}
    key = ec.derive_private_key(priv["d"], CURVE)
    pub = key.public_key().public_numbers()
    return {"x": pub.x, "y": pub.y}


def key_to_hex(key: Dict[str, int]) -> Dict[str, str]:
    return {name: hex(key[name]) for name in ("d", "x", "y") if name in key}


def key_from_hex(key: Dict[str, str]) -> Dict[str, int]:
    return {name: int(key[name], 16) for name in ("d", "x", "y") if name in key}


def address_from_pubkey(pub: Dict[str, int]) -> str:
    payload = f"ecdsa:{pub['x']}:{pub['y']}".encode()
    return sha256(payload)[:40]


def _sign_digest(digest: bytes, priv: Dict[str, int]) -> Tuple[int, int]:
    key = ec.derive_private_key(priv["d"], CURVE)
    der = key.sign(digest, ec.ECDSA(Prehashed(hashes.SHA256())))
    r, s = decode_dss_signature(der)
    return r, _low_s(s)


def sign_message(message: str, priv: Dict[str, int]) -> str:
    """Sign ``message`` and return a self-describing base64 signature.

    The decoded signature is the signer's compressed public key followed by
    the big-endian ``r`` and ``s`` scalars, so a verifier holding only the
    address can check which key produced it.
    """
    key = ec.derive_private_key(priv["d"], CURVE)
    point = key.public_key().public_bytes(
        serialization.Encoding.X962, serialization.PublicFormat.CompressedPoint
    )
    r, s = _sign_digest(_message_digest(message), priv)
    raw = point + r.to_bytes(SCALAR_SIZE, "big") + s.to_bytes(SCALAR_SIZE, "big")
    return base64.b64encode(raw).decode("ascii")


def verify_message(message: str, address: str, signature: str) -> bool:
    """Return True iff ``signature`` over ``message`` was made by ``address``'s key."""
    try:
        raw = base64.b64decode(signature.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError, AttributeError):
        return False
    if len(raw) != SIGNATURE_SIZE:
        return False
    point = raw[:POINT_SIZE]
    r = int.from_bytes(raw[POINT_SIZE:POINT_SIZE + SCALAR_SIZE], "big")
    s = int.from_bytes(raw[POINT_SIZE + SCALAR_SIZE:], "big")
    if r <= 0 or r >= N or s <= 0 or s >= N:
        return False
    try:
        key = ec.EllipticCurvePublicKey.from_encoded_point(CURVE, point)
    except ValueError:
        return False
    nums = key.public_numbers()
    if address_from_pubkey({"x": nums.x, "y": nums.y}) != address:
        return False
    try:
        key.verify(
            encode_dss_signature(r, s),
            _message_digest(message),
            ec.ECDSA(Prehashed(hashes.SHA256())),
        )
    except InvalidSignature:
        return False
    return True
