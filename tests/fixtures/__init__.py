"""
Test fixtures package for allowlist tests.

Usage:
    from fixtures.allowlist import make_allowlist, make_gate, ALICE

    def test_something():
        allowlist = make_allowlist()
        gate = make_gate(allowlist)
        gate.claim(ALICE, 1, allowlist.proof_for(ALICE))
"""

from .allowlist import (
    ADMIN,
    ALICE,
    BOB,
    CAROL,
    DAVE,
    MALLORY,
    DEFAULT_ENTRIES,
    Allowlist,
    build_proof,
    build_root,
    build_tree,
    make_allowlist,
    make_gate,
)

__all__ = [
    "ADMIN",
    "ALICE",
    "BOB",
    "CAROL",
    "DAVE",
    "MALLORY",
    "DEFAULT_ENTRIES",
    "Allowlist",
    "build_proof",
    "build_root",
    "build_tree",
    "make_allowlist",
    "make_gate",
]
