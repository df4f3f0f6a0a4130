"""
Identity Utilities

Claimants and the admin are Ethereum-style 20-byte addresses. Every identity
entering the system is normalised to its EIP-55 checksum form so that
ledger keys and admin comparisons never depend on input casing.
"""
from __future__ import annotations

from eth_utils import (
    is_address,
    is_checksum_address,
    is_checksum_formatted_address,
    to_canonical_address,
    to_checksum_address,
)

from core.schemas.errors import SchemaValidationException


ADDRESS_SIZE = 20

ZERO_ADDRESS = "0x" + "00" * ADDRESS_SIZE


def normalize_address(value: str | bytes, field_path: str = "address") -> str:
    """
    Return the checksummed form of an address.

    Accepts 0x-prefixed hex (any casing that is either uniform or a valid
    checksum) or 20 raw bytes.

    Raises:
        SchemaValidationException: If the value is not a valid address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_SIZE:
            raise SchemaValidationException(
                f"Address must be {ADDRESS_SIZE} bytes, got {len(value)}",
                field_path=field_path,
            )
        value = "0x" + bytes(value).hex()
    if not isinstance(value, str) or not is_address(value):
        raise SchemaValidationException(
            f"Invalid address: {value!r}", field_path=field_path
        )
    # Newer eth-utils releases no longer reject bad mixed-case checksums in is_address.
    if is_checksum_formatted_address(value) and not is_checksum_address(value):
        raise SchemaValidationException(
            f"Invalid address checksum: {value!r}", field_path=field_path
        )
    return to_checksum_address(value)


def address_bytes(value: str | bytes, field_path: str = "address") -> bytes:
    """Return the canonical 20-byte form of an address."""
    return to_canonical_address(normalize_address(value, field_path=field_path))


def is_zero_address(value: str | bytes) -> bool:
    return address_bytes(value) == b"\x00" * ADDRESS_SIZE


__all__ = [
    "ADDRESS_SIZE",
    "ZERO_ADDRESS",
    "normalize_address",
    "address_bytes",
    "is_zero_address",
]
