"""
Ledger Store

Key-value storage behind the claim ledger. The issuance gate owns the store
and hands it to the ledger by reference; nothing else writes to it.
"""

from __future__ import annotations

from typing import Hashable, Iterable, Protocol


TOKENS = "tokens"
CLAIMANTS = "claimants"


class LedgerStore(Protocol):
    """Set-per-namespace storage used by ClaimLedger."""

    def contains(self, namespace: str, key: Hashable) -> bool: ...

    def add(self, namespace: str, key: Hashable) -> None: ...

    def discard(self, namespace: str, key: Hashable) -> None: ...

    def members(self, namespace: str) -> Iterable[Hashable]: ...


class InMemoryLedgerStore:
    """Process-local LedgerStore backed by Python sets."""

    def __init__(self) -> None:
        self._data: dict[str, set[Hashable]] = {TOKENS: set(), CLAIMANTS: set()}

    def contains(self, namespace: str, key: Hashable) -> bool:
        return key in self._data.get(namespace, ())

    def add(self, namespace: str, key: Hashable) -> None:
        self._data.setdefault(namespace, set()).add(key)

    def discard(self, namespace: str, key: Hashable) -> None:
        self._data.get(namespace, set()).discard(key)

    def members(self, namespace: str) -> list[Hashable]:
        return list(self._data.get(namespace, ()))
