"""
Merkle Commitments
Allowlist leaf encoding and proof verification.

This module provides:
- encode_claim / leaf_hash: Leaf Encoder for (claimant, token id) entries
- MerkleProof: Dataclass representing an inclusion proof
- process_proof / verify_proof: Proof Verifier
- MerkleVerifier: Verifier bound to a live root

Canonical Commitment Rules:
1. Leaf: keccak256(keccak256(abi.encode(address, uint256)))
2. Parent hashing: keccak256(sorted pair)
3. Empty proof: root = leaf

Usage:
    from core.merkle import leaf_hash, verify_proof

    leaf = leaf_hash(claimant, token_id)
    assert verify_proof(siblings, root, leaf)

Tree construction is done off-system; only the root is consumed here.
"""
from .leaf import (
    WORD_SIZE,
    MAX_TOKEN_ID,
    validate_token_id,
    encode_claim,
    leaf_hash,
)

from .merkle_proofs import (
    MerkleProof,
    MerkleVerifier,
    process_proof,
    verify_proof,
)


__all__ = [
    # Leaf Encoder
    "WORD_SIZE",
    "MAX_TOKEN_ID",
    "validate_token_id",
    "encode_claim",
    "leaf_hash",
    # Proof Verifier
    "MerkleProof",
    "MerkleVerifier",
    "process_proof",
    "verify_proof",
]
