"""
Hashing Utilities
Keccak-256 hashing and hex helpers for allowlist commitments.

This module provides:
- Keccak-256 hashing for raw bytes (the hash used by Solidity and by
  OpenZeppelin's Merkle tooling)
- Commutative pair hashing for Merkle internal nodes
- Hex encoding/decoding with 0x prefix
- The all-zero sentinel and 32-byte value coercion

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Pair hashing sorts its inputs, so proofs carry no left/right flags
"""
from __future__ import annotations

from eth_utils import keccak

from core.schemas.errors import SchemaValidationException


HASH_SIZE = 32

# Reserved to mean "unset"; never a valid commitment root.
ZERO_HASH: bytes = b"\x00" * HASH_SIZE


def keccak256(data: bytes) -> bytes:
    """
    Compute the Keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(data)


def hash_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling nodes in canonical order.

    The smaller value (byte-wise, which equals numeric order for
    equal-length big-endian values) goes first:
    parent = keccak256(min(a, b) + max(a, b))
    """
    if a < b:
        return keccak256(a + b)
    return keccak256(b + a)


def is_zero_hash(value: bytes) -> bool:
    """Check whether a value is the all-zero sentinel."""
    return value == ZERO_HASH


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def as_hash32(value: bytes | str, field_path: str = "hash") -> bytes:
    """
    Coerce a 32-byte value given as raw bytes or 0x-prefixed hex.

    Raises:
        SchemaValidationException: If the value is not exactly 32 bytes
    """
    if isinstance(value, str):
        try:
            value = from_hex(value)
        except ValueError as e:
            raise SchemaValidationException(str(e), field_path=field_path) from e
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise SchemaValidationException(
            f"Expected a {HASH_SIZE}-byte value", field_path=field_path
        )
    return bytes(value)


__all__ = [
    "HASH_SIZE",
    "ZERO_HASH",
    "keccak256",
    "hash_pair",
    "is_zero_hash",
    "to_hex",
    "from_hex",
    "as_hash32",
]
