"""
Core cryptographic utilities.

Keccak-256 hashing, commutative pair hashing, hex helpers and
address normalisation.
"""
from .hashing import (
    HASH_SIZE,
    ZERO_HASH,
    keccak256,
    hash_pair,
    is_zero_hash,
    to_hex,
    from_hex,
    as_hash32,
)
from .identity import (
    ADDRESS_SIZE,
    ZERO_ADDRESS,
    normalize_address,
    address_bytes,
    is_zero_address,
)

__all__ = [
    "HASH_SIZE",
    "ZERO_HASH",
    "keccak256",
    "hash_pair",
    "is_zero_hash",
    "to_hex",
    "from_hex",
    "as_hash32",
    "ADDRESS_SIZE",
    "ZERO_ADDRESS",
    "normalize_address",
    "address_bytes",
    "is_zero_address",
]
