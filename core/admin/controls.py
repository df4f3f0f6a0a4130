"""
Admin Controls

Holds the configuration that only the privileged identity may change:
the commitment root, the suspension flag, the metadata location and the
privileged identity itself.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from core.crypto.hashing import HASH_SIZE, from_hex, is_zero_hash, to_hex
from core.crypto.identity import is_zero_address, normalize_address
from core.events.recorder import EventLog
from core.schemas.errors import (
    InvalidRootException,
    NotAuthorizedException,
    SchemaValidationException,
)


logger = logging.getLogger(__name__)


def validate_root(value: bytes | str) -> bytes:
    """
    Coerce and validate a commitment root.

    Raises:
        InvalidRootException: If the value is not 32 bytes or is all zeros
    """
    if isinstance(value, str):
        try:
            value = from_hex(value)
        except ValueError as e:
            raise InvalidRootException(f"Malformed commitment root: {e}") from e
    if not isinstance(value, (bytes, bytearray)) or len(value) != HASH_SIZE:
        raise InvalidRootException(
            f"Commitment root must be {HASH_SIZE} bytes",
        )
    if is_zero_hash(bytes(value)):
        raise InvalidRootException()
    return bytes(value)


class AdminControls:
    """
    Admin-gated configuration.

    Every mutation checks the caller against the current admin first and
    then validates its input; a rejected call changes nothing. The lock is
    shared with the issuance gate so admin changes and claims are totally
    ordered.
    """

    def __init__(
        self,
        admin: str,
        commitment_root: bytes | str,
        metadata_location: str = "",
        *,
        suspended: bool = False,
        events: Optional[EventLog] = None,
        lock: Optional[threading.RLock] = None,
    ) -> None:
        self._root = validate_root(commitment_root)
        admin = normalize_address(admin, "admin")
        if is_zero_address(admin):
            raise SchemaValidationException("Admin cannot be the zero address", "admin")
        self._admin = admin
        self._metadata_location = metadata_location
        self._suspended = bool(suspended)
        self._events = events if events is not None else EventLog()
        self._lock = lock if lock is not None else threading.RLock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def events(self) -> EventLog:
        return self._events

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def commitment_root(self) -> bytes:
        return self._root

    @property
    def suspended(self) -> bool:
        return self._suspended

    @property
    def metadata_location(self) -> str:
        return self._metadata_location

    def is_admin(self, caller: str) -> bool:
        return normalize_address(caller, "caller") == self._admin

    def settings(self) -> tuple[str, bytes, bool, str]:
        """Current (admin, root, suspended, metadata location)."""
        with self._lock:
            return (self._admin, self._root, self._suspended, self._metadata_location)

    def restore_settings(self, settings: tuple[str, bytes, bool, str]) -> None:
        """Put back values captured by settings(); no event is recorded."""
        with self._lock:
            self._admin, self._root, self._suspended, self._metadata_location = settings

    def _require_admin(self, caller: str, operation: str) -> str:
        caller = normalize_address(caller, "caller")
        if not self.is_admin(caller):
            logger.warning(f"Rejected {operation} from non-admin {caller}")
            raise NotAuthorizedException(caller, operation)
        return caller

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set_commitment_root(self, caller: str, new_root: bytes | str) -> bytes:
        """Replace the live root. Proofs for the old root stop verifying at once."""
        with self._lock:
            caller = self._require_admin(caller, "set_commitment_root")
            root = validate_root(new_root)
            previous = self._root
            self._root = root
            self._events.record(
                "root_updated",
                actor=caller,
                previous_root=to_hex(previous),
                root=to_hex(root),
            )
            logger.info(f"Commitment root set to {to_hex(root)}")
            return root

    def set_suspended(self, caller: str, suspended: bool) -> None:
        with self._lock:
            caller = self._require_admin(caller, "set_suspended")
            self._suspended = bool(suspended)
            self._events.record("paused" if suspended else "unpaused", actor=caller)
            logger.info(f"Claims {'suspended' if suspended else 'resumed'} by {caller}")

    def pause(self, caller: str) -> None:
        self.set_suspended(caller, True)

    def unpause(self, caller: str) -> None:
        self.set_suspended(caller, False)

    def set_metadata_location(self, caller: str, location: str) -> None:
        with self._lock:
            caller = self._require_admin(caller, "set_metadata_location")
            if not isinstance(location, str):
                raise SchemaValidationException(
                    "Metadata location must be a string", "metadata_location"
                )
            self._metadata_location = location
            self._events.record(
                "metadata_location_updated", actor=caller, location=location
            )
            logger.info(f"Metadata location set to {location!r}")

    def transfer_admin(self, caller: str, new_admin: str) -> str:
        """Hand the privileged identity to another address."""
        with self._lock:
            caller = self._require_admin(caller, "transfer_admin")
            new_admin = normalize_address(new_admin, "new_admin")
            if is_zero_address(new_admin):
                raise SchemaValidationException(
                    "Admin cannot be the zero address", "new_admin"
                )
            self._admin = new_admin
            self._events.record(
                "admin_transferred",
                actor=caller,
                previous_admin=caller,
                new_admin=new_admin,
            )
            logger.info(f"Admin transferred from {caller} to {new_admin}")
            return new_admin
