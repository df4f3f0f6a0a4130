"""
State Snapshots

JSON persistence for the issuance gate.
"""

from .store import (
    FORMAT_VERSION,
    StateIOError,
    StateSnapshot,
    hold_state_lock,
    load_state,
    locked_state,
    restore_gate,
    save_state,
    snapshot_gate,
    state_lock,
)

__all__ = [
    "FORMAT_VERSION",
    "StateIOError",
    "StateSnapshot",
    "hold_state_lock",
    "load_state",
    "locked_state",
    "restore_gate",
    "save_state",
    "snapshot_gate",
    "state_lock",
]
