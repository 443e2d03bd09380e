from .block import Block
from .chain import Chain
from .errors import (
    AddressMismatch,
    ChallengeExpired,
    ClaimRejected,
    InvalidTimestamp,
    MalformedMessage,
    SignatureInvalid,
)
from .wallet import Wallet

__all__ = [
    "Block",
    "Chain",
    "Wallet",
    "ClaimRejected",
    "MalformedMessage",
    "AddressMismatch",
    "InvalidTimestamp",
    "ChallengeExpired",
    "SignatureInvalid",
]
