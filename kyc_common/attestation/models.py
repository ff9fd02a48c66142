"""
Attestation Data Models
=======================

Parsed representation of attestation tokens.

Version: 0.1.0
"""

from dataclasses import dataclass

TOKEN_SEPARATOR = "_"
DIGEST_HEX_LENGTH = 64


@dataclass(frozen=True)
class AttestationParts:
    """Components of a ``<prefix>_<timestamp>_<hex-digest>`` token."""

    prefix: str
    timestamp: int
    digest: str

    def to_token(self) -> str:
        return TOKEN_SEPARATOR.join((self.prefix, str(self.timestamp), self.digest))


def parse_token(token: str) -> AttestationParts | None:
    """
    Split an attestation token into its parts.

    Returns None when the token does not have exactly three fields, the
    timestamp is not a non-negative integer, or the digest is not hex.
    """
    if not isinstance(token, str):
        return None

    parts = token.split(TOKEN_SEPARATOR)
    if len(parts) != 3:
        return None

    prefix, raw_timestamp, digest = parts
    if not prefix or not (raw_timestamp.isascii() and raw_timestamp.isdigit()):
        return None
    if len(digest) != DIGEST_HEX_LENGTH or not digest.isalnum():
        return None
    try:
        bytes.fromhex(digest)
    except ValueError:
        return None

    return AttestationParts(prefix=prefix, timestamp=int(raw_timestamp), digest=digest)
