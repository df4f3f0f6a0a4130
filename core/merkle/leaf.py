"""
Leaf Encoder
Deterministic leaf commitments for (claimant, token id) allowlist entries.

Canonical Commitment Rules (Hard Contracts):
1. Encoding: abi.encode(address claimant, uint256 tokenId)
   - address left-padded with zeros to 32 bytes
   - tokenId as a 32-byte big-endian unsigned integer
2. Leaf: keccak256(keccak256(encoding))

The second hash keeps a 64-byte leaf preimage from ever being read as two
concatenated internal nodes. These rules must match the external tool that
builds the tree bit for bit; they are the same rules OpenZeppelin's
StandardMerkleTree uses for the ["address", "uint256"] leaf type.
"""
from __future__ import annotations

from core.crypto.hashing import keccak256
from core.crypto.identity import address_bytes
from core.schemas.errors import SchemaValidationException


WORD_SIZE = 32

MAX_TOKEN_ID = 2**256 - 1


def validate_token_id(token_id: int) -> int:
    """
    Check that a token id fits in a uint256.

    Raises:
        SchemaValidationException: If token_id is not an int in [0, 2**256)
    """
    if isinstance(token_id, bool) or not isinstance(token_id, int):
        raise SchemaValidationException(
            f"Token id must be an integer, got {type(token_id).__name__}",
            field_path="token_id",
        )
    if token_id < 0 or token_id > MAX_TOKEN_ID:
        raise SchemaValidationException(
            f"Token id out of uint256 range: {token_id}",
            field_path="token_id",
        )
    return token_id


def encode_claim(claimant: str | bytes, token_id: int) -> bytes:
    """
    ABI-encode a (claimant, token id) pair.

    Returns:
        64 bytes: padded address word followed by the token id word
    """
    addr = address_bytes(claimant, field_path="claimant")
    validate_token_id(token_id)
    return addr.rjust(WORD_SIZE, b"\x00") + token_id.to_bytes(WORD_SIZE, "big")


def leaf_hash(claimant: str | bytes, token_id: int) -> bytes:
    """
    Compute the 32-byte leaf commitment for an allowlist entry.

    Example:
        >>> leaf = leaf_hash("0x" + "11" * 20, 1)
        >>> len(leaf)
        32
    """
    return keccak256(keccak256(encode_claim(claimant, token_id)))


__all__ = [
    "WORD_SIZE",
    "MAX_TOKEN_ID",
    "validate_token_id",
    "encode_claim",
    "leaf_hash",
]
