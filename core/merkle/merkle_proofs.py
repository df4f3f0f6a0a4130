"""
Proof Verifier
Recomputes a commitment root from a leaf and its sibling path.

Canonical Commitment Rules (Hard Contracts):
1. Parent hashing: parent = keccak256(min(a, b) + max(a, b))
2. Proof path: sibling hashes ordered from the leaf level upwards
3. Empty proof: the leaf itself is the root (tree of depth zero)

Verification accepts only an exact match with the claimed root. There is
no partial or best-effort acceptance, and a sibling that is not 32 bytes
makes the whole proof invalid.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from core.crypto.hashing import HASH_SIZE, hash_pair


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for one allowlist leaf.

    Attributes:
        leaf: The leaf commitment being proven
        siblings: Sibling hashes from bottom to top of the tree
        root: The commitment root this proof is checked against
    """
    leaf: bytes
    siblings: list[bytes] = field(default_factory=list)
    root: bytes = b""

    def verify(self) -> bool:
        """Check this proof against its own root."""
        return verify_proof(self.siblings, self.root, self.leaf)


def process_proof(leaf: bytes, proof: Sequence[bytes]) -> bytes:
    """
    Fold a leaf with each sibling to produce a candidate root.

    Args:
        leaf: The starting leaf hash
        proof: Sibling hashes (bottom-up)

    Returns:
        The recomputed root (the leaf itself for an empty proof)

    Raises:
        ValueError: If any node is not 32 bytes
    """
    if len(leaf) != HASH_SIZE:
        raise ValueError(f"Leaf must be {HASH_SIZE} bytes, got {len(leaf)}")

    computed = leaf
    for position, sibling in enumerate(proof):
        if len(sibling) != HASH_SIZE:
            raise ValueError(
                f"Proof element {position} must be {HASH_SIZE} bytes, "
                f"got {len(sibling)}"
            )
        computed = hash_pair(computed, sibling)
    return computed


def verify_proof(proof: Sequence[bytes], root: bytes, leaf: bytes) -> bool:
    """
    Verify that a leaf belongs to the tree with the given root.

    Malformed proofs verify as False rather than raising, so callers can
    treat every non-matching path the same way.

    Args:
        proof: Sibling hashes (bottom-up)
        root: The claimed commitment root
        leaf: The leaf commitment

    Returns:
        True only if the recomputed root equals root exactly
    """
    try:
        computed = process_proof(leaf, proof)
    except ValueError:
        return False
    return computed == root


class MerkleVerifier:
    """
    Verifies proofs against a root supplied by a callable.

    The root is read on every call, so a root replaced by the admin takes
    effect for the very next verification.

    Example:
        >>> verifier = MerkleVerifier(lambda: root)
        >>> verifier.verify(leaf, siblings)
        True
    """

    def __init__(self, root_provider) -> None:
        self._root_provider = root_provider

    @property
    def root(self) -> bytes:
        return self._root_provider()

    def verify(self, leaf: bytes, proof: Sequence[bytes]) -> bool:
        return verify_proof(proof, self.root, leaf)

    def build(self, leaf: bytes, proof: Sequence[bytes]) -> MerkleProof:
        """Bundle a leaf and path with the current root for reporting."""
        return MerkleProof(leaf=leaf, siblings=list(proof), root=self.root)


__all__ = [
    "MerkleProof",
    "MerkleVerifier",
    "process_proof",
    "verify_proof",
]
