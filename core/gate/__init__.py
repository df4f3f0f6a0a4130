"""
Issuance Gate

Claim orchestration over the ledger, proof verifier, admin controls and
token registry.
"""

from .issuance_gate import IssuanceGate, coerce_proof

__all__ = ["IssuanceGate", "coerce_proof"]
