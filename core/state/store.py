"""
State Snapshots

Save and load the persisted state of an issuance gate as a JSON document:

    commitment root, suspension flag, metadata location, admin,
    royalty settings, consumed token ids, consumed claimants, issued tokens

Token ids are written as decimal strings so uint256 values survive any
JSON reader. The event journal is process-local and is not persisted.

Writers serialize on a sidecar lock file (<state>.lock). locked_state() holds
it from load to save, so two processes changing the same file never lose
each other's claims.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

from filelock import FileLock, Timeout
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.crypto.hashing import to_hex
from core.gate.issuance_gate import IssuanceGate
from core.ledger.store import LedgerStore
from core.schemas.claims import RoyaltySettings
from core.schemas.errors import AllowlistException, ErrorCodes


logger = logging.getLogger(__name__)


FORMAT_VERSION = "1"
SUPPORTED_FORMAT_VERSIONS: frozenset[str] = frozenset({"1"})

LOCK_SUFFIX = ".lock"
DEFAULT_LOCK_TIMEOUT = 10.0


class StateIOError(AllowlistException):
    """Error while reading or writing a state snapshot."""

    def __init__(self, message: str, path: str | Path | None = None) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.STATE_IO_ERROR,
            details={"path": str(path)} if path is not None else None,
        )


class StateSnapshot(BaseModel):
    """Serialized form of the gate state."""

    model_config = ConfigDict(extra="forbid")

    format_version: str = Field(default=FORMAT_VERSION)
    admin: str
    commitment_root: str = Field(..., description="0x-prefixed 32-byte root")
    suspended: bool = False
    metadata_location: str = ""
    royalty: RoyaltySettings
    consumed_tokens: list[str] = Field(default_factory=list)
    consumed_claimants: list[str] = Field(default_factory=list)
    issued: dict[str, str] = Field(
        default_factory=dict,
        description="token id -> owner",
    )


def snapshot_gate(gate: IssuanceGate) -> StateSnapshot:
    """Capture the persisted state of a gate."""
    with gate.lock:
        controls = gate.controls
        issued = {str(t): owner for t, owner in sorted(gate.registry.issued().items())}
        return StateSnapshot(
            admin=controls.admin,
            commitment_root=to_hex(controls.commitment_root),
            suspended=controls.suspended,
            metadata_location=controls.metadata_location,
            royalty=gate.registry.royalty,
            consumed_tokens=[str(t) for t in gate.ledger.consumed_tokens()],
            consumed_claimants=gate.ledger.consumed_claimants(),
            issued=issued,
        )


def restore_gate(
    snapshot: StateSnapshot,
    *,
    store: Optional[LedgerStore] = None,
) -> IssuanceGate:
    """
    Rebuild a gate from a snapshot.

    Raises:
        StateIOError: If the snapshot is internally inconsistent
        InvalidRootException: If the stored root is zero or malformed
    """
    if snapshot.format_version not in SUPPORTED_FORMAT_VERSIONS:
        raise StateIOError(
            f"Unsupported state format version: {snapshot.format_version!r}"
        )

    consumed_tokens = [int(t) for t in snapshot.consumed_tokens]
    issued = {int(t): owner for t, owner in snapshot.issued.items()}
    if set(consumed_tokens) != set(issued):
        raise StateIOError("Consumed tokens and issued tokens disagree")
    if len(snapshot.consumed_claimants) != len(consumed_tokens):
        raise StateIOError("Each consumed token needs exactly one consumed claimant")

    gate = IssuanceGate.create(
        admin=snapshot.admin,
        commitment_root=snapshot.commitment_root,
        metadata_location=snapshot.metadata_location,
        royalty_recipient=snapshot.royalty.recipient,
        royalty_bps=snapshot.royalty.bps,
        suspended=snapshot.suspended,
        store=store,
    )
    gate.ledger.restore(consumed_tokens, snapshot.consumed_claimants)
    for token_id, owner in sorted(issued.items()):
        gate.registry.issue(token_id, owner)
    return gate


def save_state(gate: IssuanceGate, path: str | Path) -> Path:
    """
    Write a gate snapshot to path, replacing the file atomically.

    Returns:
        The path written
    """
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    content = snapshot_gate(gate).model_dump_json(indent=2)

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{out_path.name}.", dir=str(out_path.parent)
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, out_path)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise StateIOError(f"Failed to write state: {e}", out_path) from e

    logger.info(f"Saved state to {out_path}")
    return out_path


def load_state(path: str | Path, *, store: Optional[LedgerStore] = None) -> IssuanceGate:
    """
    Load a gate from a snapshot file.

    Raises:
        StateIOError: If the file is missing, unreadable or malformed
    """
    in_path = Path(path)
    if not in_path.exists():
        raise StateIOError(f"State file not found: {in_path}", in_path)

    try:
        data: Any = json.loads(in_path.read_text(encoding="utf-8"))
        snapshot = StateSnapshot.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise StateIOError(f"Invalid state file {in_path}: {e}", in_path) from e

    logger.info(f"Loaded state from {in_path}")
    return restore_gate(snapshot, store=store)


def state_lock(path: str | Path) -> FileLock:
    """Return the cross-process lock guarding a state file."""
    path = Path(path)
    return FileLock(str(path.with_name(path.name + LOCK_SUFFIX)), thread_local=False)


@contextmanager
def hold_state_lock(
    path: str | Path, *, timeout: float = DEFAULT_LOCK_TIMEOUT
) -> Iterator[FileLock]:
    """
    Hold the state file's lock for the enclosed block.

    Raises:
        StateIOError: If another process keeps the lock past timeout seconds
    """
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    lock = state_lock(path)
    try:
        lock.acquire(timeout=timeout)
    except Timeout as e:
        raise StateIOError(f"State file is locked by another process: {path}", path) from e
    try:
        yield lock
    finally:
        lock.release()


@contextmanager
def locked_state(
    path: str | Path,
    *,
    timeout: float = DEFAULT_LOCK_TIMEOUT,
    store: Optional[LedgerStore] = None,
) -> Iterator[IssuanceGate]:
    """
    Load a gate, let the block change it, then save it, as one unit.

    The lock is held from load to save. If the block or the save raises,
    the file is left as it was and the exception propagates.

    Usage:
        with locked_state(path) as gate:
            gate.claim(caller, token_id, proof)
    """
    with hold_state_lock(path, timeout=timeout):
        gate = load_state(path, store=store)
        with gate.transaction():
            yield gate
            save_state(gate, path)
