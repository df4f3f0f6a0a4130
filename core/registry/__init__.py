"""
Token Registry

Ownership bookkeeping collaborator used by the issuance gate.
"""

from .token_registry import InMemoryTokenRegistry, TokenRegistry

__all__ = ["TokenRegistry", "InMemoryTokenRegistry"]
