"""
Issuance Gate

Orchestrates an allowlist claim:

    suspension check -> ledger check (token, claimant) -> leaf encoding
    -> proof verification against the live root -> ledger commit
    -> token registry issuance

The gate owns a single re-entrant lock shared with the admin controls.
claim() and every admin mutation hold it for their entire duration, so the
check-then-commit sequence is atomic even under a threaded server and at
most one claim can succeed per token id and per claimant.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from core.admin.controls import AdminControls
from core.crypto.hashing import from_hex, to_hex
from core.crypto.identity import normalize_address
from core.events.models import EventKind, StateEvent
from core.events.recorder import EventLog
from core.ledger.claim_ledger import ClaimLedger
from core.ledger.store import InMemoryLedgerStore, LedgerStore
from core.merkle.leaf import leaf_hash, validate_token_id
from core.merkle.merkle_proofs import MerkleProof, MerkleVerifier
from core.registry.token_registry import InMemoryTokenRegistry, TokenRegistry
from core.schemas.claims import ClaimReceipt, GateStatus, RoyaltyQuote, RoyaltySettings
from core.schemas.errors import (
    ClaimantAlreadyClaimedException,
    InvalidProofException,
    SchemaValidationException,
    SystemSuspendedException,
    TokenAlreadyClaimedException,
)


logger = logging.getLogger(__name__)


def coerce_proof(proof: Sequence[bytes | str]) -> list[bytes]:
    """
    Accept proof elements as raw bytes or 0x-prefixed hex.

    Lengths are not checked here; a wrong-length element simply fails
    verification.
    """
    siblings: list[bytes] = []
    for position, element in enumerate(proof):
        if isinstance(element, str):
            try:
                element = from_hex(element)
            except ValueError as e:
                raise SchemaValidationException(str(e), f"proof[{position}]") from e
        if not isinstance(element, (bytes, bytearray)):
            raise SchemaValidationException(
                "Proof elements must be bytes or hex strings", f"proof[{position}]"
            )
        siblings.append(bytes(element))
    return siblings


class IssuanceGate:
    """
    Entry point for claims, admin operations and reads.

    Example:
        >>> gate = IssuanceGate.create(admin=admin, commitment_root=root,
        ...                            metadata_location="ipfs://base/",
        ...                            royalty_recipient=admin, royalty_bps=500)
        >>> receipt = gate.claim(alice, 1, proof)
        >>> gate.is_token_consumed(1)
        True
    """

    def __init__(
        self,
        controls: AdminControls,
        registry: TokenRegistry,
        ledger: Optional[ClaimLedger] = None,
    ) -> None:
        self._controls = controls
        self._registry = registry
        self._ledger = ledger if ledger is not None else ClaimLedger()
        self._lock = controls.lock
        self._events = controls.events
        self._verifier = MerkleVerifier(lambda: self._controls.commitment_root)

    @classmethod
    def create(
        cls,
        *,
        admin: str,
        commitment_root: bytes | str,
        metadata_location: str = "",
        royalty_recipient: Optional[str] = None,
        royalty_bps: int = 0,
        suspended: bool = False,
        registry: Optional[TokenRegistry] = None,
        store: Optional[LedgerStore] = None,
    ) -> "IssuanceGate":
        """
        Build a gate and its collaborators from initialization parameters.

        Raises:
            InvalidRootException: If commitment_root is zero or malformed
            SchemaValidationException: If an address or the royalty rate is invalid
        """
        lock = threading.RLock()
        events = EventLog()
        controls = AdminControls(
            admin,
            commitment_root,
            metadata_location,
            suspended=suspended,
            events=events,
            lock=lock,
        )
        if registry is None:
            try:
                royalty = RoyaltySettings(
                    recipient=normalize_address(
                        royalty_recipient or admin, "royalty_recipient"
                    ),
                    bps=royalty_bps,
                )
            except ValueError as e:
                raise SchemaValidationException(str(e), "royalty_bps") from e
            registry = InMemoryTokenRegistry(royalty)
        ledger = ClaimLedger(store if store is not None else InMemoryLedgerStore())
        return cls(controls, registry, ledger)

    # ------------------------------------------------------------------
    # Collaborators
    # ------------------------------------------------------------------

    @property
    def controls(self) -> AdminControls:
        return self._controls

    @property
    def registry(self) -> TokenRegistry:
        return self._registry

    @property
    def ledger(self) -> ClaimLedger:
        return self._ledger

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def transaction(self) -> Iterator["IssuanceGate"]:
        """
        Hold the gate lock and undo every in-memory change if the block raises.

        Lets a follow-up step, such as writing the state file, join the claim
        or admin change before it as one unit:

            with gate.transaction():
                gate.claim(caller, token_id, proof)
                save_state(gate, path)
        """
        with self._lock:
            settings = self._controls.settings()
            tokens = self._ledger.consumed_tokens()
            claimants = self._ledger.consumed_claimants()
            issued = set(self._registry.issued())
            next_sequence = self._events.next_sequence
            try:
                yield self
            except BaseException:
                for token_id in set(self._registry.issued()) - issued:
                    self._registry.revoke(token_id)
                self._ledger.retain(tokens, claimants)
                self._controls.restore_settings(settings)
                if self._events.next_sequence != next_sequence:
                    logger.warning("Gate changes rolled back")
                self._events.truncate(next_sequence)
                raise

    # ------------------------------------------------------------------
    # Claim surface
    # ------------------------------------------------------------------

    def claim(
        self,
        caller: str,
        token_id: int,
        proof: Sequence[bytes | str],
    ) -> ClaimReceipt:
        """
        Claim token_id for the calling identity.

        The claimant is always the caller; there is no way to claim on
        behalf of another address.

        Raises:
            SystemSuspendedException: Claims are paused
            TokenAlreadyClaimedException: token_id was claimed before
            ClaimantAlreadyClaimedException: caller claimed before
            InvalidProofException: proof does not reduce to the live root
            TokenRegistryException: issuance failed (ledger left untouched)
        """
        claimant = normalize_address(caller, "caller")
        token_id = validate_token_id(token_id)
        siblings = coerce_proof(proof)

        with self._lock:
            if self._controls.suspended:
                logger.warning(f"Claim for token {token_id} rejected: suspended")
                raise SystemSuspendedException()

            if self._ledger.is_token_consumed(token_id):
                logger.warning(f"Claim for token {token_id} rejected: token consumed")
                raise TokenAlreadyClaimedException(token_id)

            if self._ledger.is_claimant_consumed(claimant):
                logger.warning(f"Claim by {claimant} rejected: claimant consumed")
                raise ClaimantAlreadyClaimedException(claimant)

            leaf = leaf_hash(claimant, token_id)
            root = self._verifier.root
            if not self._verifier.verify(leaf, siblings):
                logger.warning(
                    f"Claim for token {token_id} by {claimant} rejected: invalid proof"
                )
                raise InvalidProofException(
                    details={
                        "token_id": str(token_id),
                        "claimant": claimant,
                        "leaf": to_hex(leaf),
                        "proof_length": len(siblings),
                    }
                )

            with self._ledger.staged_commit(token_id, claimant):
                self._registry.issue(token_id, claimant)

            event = self._events.record(
                "token_claimed",
                actor=claimant,
                token_id=str(token_id),
                leaf=to_hex(leaf),
                root=to_hex(root),
            )
            logger.info(f"Token {token_id} claimed by {claimant}")

            return ClaimReceipt(
                token_id=token_id,
                claimant=claimant,
                leaf=to_hex(leaf),
                root=to_hex(root),
                event_sequence=event.sequence,
            )

    # ------------------------------------------------------------------
    # Admin surface
    # ------------------------------------------------------------------

    def set_commitment_root(self, caller: str, new_root: bytes | str) -> bytes:
        return self._controls.set_commitment_root(caller, new_root)

    def set_suspended(self, caller: str, suspended: bool) -> None:
        self._controls.set_suspended(caller, suspended)

    def pause(self, caller: str) -> None:
        self._controls.pause(caller)

    def unpause(self, caller: str) -> None:
        self._controls.unpause(caller)

    def set_metadata_location(self, caller: str, location: str) -> None:
        self._controls.set_metadata_location(caller, location)

    def transfer_admin(self, caller: str, new_admin: str) -> str:
        return self._controls.transfer_admin(caller, new_admin)

    # ------------------------------------------------------------------
    # Read surface
    # ------------------------------------------------------------------

    def is_token_consumed(self, token_id: int) -> bool:
        with self._lock:
            return self._ledger.is_token_consumed(token_id)

    def is_claimant_consumed(self, claimant: str) -> bool:
        with self._lock:
            return self._ledger.is_claimant_consumed(claimant)

    def metadata_location_for(self, token_id: int) -> str:
        # Same base location for every token id.
        validate_token_id(token_id)
        with self._lock:
            return self._controls.metadata_location

    def check_proof(
        self, claimant: str, token_id: int, proof: Sequence[bytes | str]
    ) -> MerkleProof:
        """Bundle the leaf for (claimant, token id) and the proof with the live root."""
        leaf = leaf_hash(normalize_address(claimant, "claimant"), validate_token_id(token_id))
        siblings = coerce_proof(proof)
        with self._lock:
            return self._verifier.build(leaf, siblings)

    def verify(self, claimant: str, token_id: int, proof: Sequence[bytes | str]) -> bool:
        """Dry-run the proof check for a (claimant, token id) pair."""
        return self.check_proof(claimant, token_id, proof).verify()

    def owner_of(self, token_id: int) -> str:
        with self._lock:
            return self._registry.owner_of(token_id)

    def balance_of(self, owner: str) -> int:
        with self._lock:
            return self._registry.balance_of(owner)

    def royalty_info(self, token_id: int, sale_price: int) -> RoyaltyQuote:
        return self._registry.royalty_info(token_id, sale_price)

    def events(self, kind: Optional[EventKind] = None) -> list[StateEvent]:
        with self._lock:
            return self._events.events(kind)

    def status(self) -> GateStatus:
        with self._lock:
            return GateStatus(
                admin=self._controls.admin,
                commitment_root=to_hex(self._controls.commitment_root),
                suspended=self._controls.suspended,
                metadata_location=self._controls.metadata_location,
                royalty=self._registry.royalty,
                tokens_claimed=len(self._ledger.consumed_tokens()),
            )
