"""Reasons a star claim can be refused.

Every error is raised synchronously from ``Chain.submit_claim`` before any
block is committed, so a caller that catches ``ClaimRejected`` knows the
chain and its indices are unchanged.
"""


class ClaimRejected(Exception):
    """Base class for refused ownership claims."""

    reason = "claim rejected"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.reason)


class MalformedMessage(ClaimRejected):
    reason = "malformed message (expected format: <wallet address>:<time>:starRegistry)"


class AddressMismatch(ClaimRejected):
    reason = "message address does not match given address"


class InvalidTimestamp(ClaimRejected):
    reason = "message time is invalid"


class ChallengeExpired(ClaimRejected):
    reason = "star can no longer be validated with this message, request a new ownership challenge"


class SignatureInvalid(ClaimRejected):
    reason = "message verification failed"
