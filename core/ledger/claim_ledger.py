"""
Claim Ledger

Tracks which token ids and which claimants have been consumed. Both mappings
are monotonic: an entry that reads True never reads False again once the
claim that set it has completed.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator

from core.crypto.identity import normalize_address
from core.ledger.store import CLAIMANTS, TOKENS, InMemoryLedgerStore, LedgerStore
from core.merkle.leaf import validate_token_id


logger = logging.getLogger(__name__)


class ClaimLedger:
    """
    Consumed-token and consumed-claimant bookkeeping.

    Entries are created lazily: an unknown key reads as not consumed.
    Only the issuance gate calls commit, after every check has passed.
    """

    def __init__(self, store: LedgerStore | None = None) -> None:
        self._store = store if store is not None else InMemoryLedgerStore()

    @property
    def store(self) -> LedgerStore:
        return self._store

    def is_token_consumed(self, token_id: int) -> bool:
        return self._store.contains(TOKENS, validate_token_id(token_id))

    def is_claimant_consumed(self, claimant: str) -> bool:
        return self._store.contains(CLAIMANTS, normalize_address(claimant, "claimant"))

    def commit(self, token_id: int, claimant: str) -> None:
        """Mark both the token and the claimant as consumed."""
        token_id = validate_token_id(token_id)
        claimant = normalize_address(claimant, "claimant")
        self._store.add(TOKENS, token_id)
        self._store.add(CLAIMANTS, claimant)
        logger.debug(f"Ledger committed token={token_id} claimant={claimant}")

    @contextmanager
    def staged_commit(self, token_id: int, claimant: str) -> Iterator[None]:
        """
        Commit, then undo the commit if the enclosed block raises.

        The caller must hold the gate lock for the whole block so that the
        staged entries are never observed by another operation.
        """
        token_id = validate_token_id(token_id)
        claimant = normalize_address(claimant, "claimant")
        self.commit(token_id, claimant)
        try:
            yield
        except BaseException:
            self._store.discard(TOKENS, token_id)
            self._store.discard(CLAIMANTS, claimant)
            logger.warning(f"Ledger commit for token={token_id} rolled back")
            raise

    def consumed_tokens(self) -> list[int]:
        return sorted(self._store.members(TOKENS))

    def consumed_claimants(self) -> list[str]:
        return sorted(self._store.members(CLAIMANTS))

    def restore(self, tokens: Iterable[int], claimants: Iterable[str]) -> None:
        """Load previously committed entries (used when loading a snapshot)."""
        for token_id in tokens:
            self._store.add(TOKENS, validate_token_id(token_id))
        for claimant in claimants:
            self._store.add(CLAIMANTS, normalize_address(claimant, "claimant"))

    def retain(self, tokens: Iterable[int], claimants: Iterable[str]) -> None:
        """Discard every entry not in the given sets (undo of a failed change)."""
        keep_tokens = set(tokens)
        keep_claimants = set(claimants)
        for token_id in self.consumed_tokens():
            if token_id not in keep_tokens:
                self._store.discard(TOKENS, token_id)
        for claimant in self.consumed_claimants():
            if claimant not in keep_claimants:
                self._store.discard(CLAIMANTS, claimant)
