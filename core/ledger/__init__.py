"""
Claim Ledger

Monotonic consumed-token / consumed-claimant tracking.
"""

from .claim_ledger import ClaimLedger
from .store import CLAIMANTS, TOKENS, InMemoryLedgerStore, LedgerStore

__all__ = [
    "ClaimLedger",
    "LedgerStore",
    "InMemoryLedgerStore",
    "TOKENS",
    "CLAIMANTS",
]
