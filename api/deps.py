"""
API Dependencies

Dependency injection for the API.
Provides the process-wide issuance gate and the calling identity.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Optional

from fastapi import Header
from filelock import FileLock, Timeout

from api.errors import InvalidRequestError, MissingCallerError, ServiceNotConfiguredError
from core.config.runtime import RuntimeConfig
from core.crypto.identity import normalize_address
from core.gate.issuance_gate import IssuanceGate
from core.schemas.errors import SchemaValidationException
from core.state.store import load_state, save_state, state_lock

logger = logging.getLogger(__name__)


CALLER_HEADER = "X-Caller-Address"

_gate: Optional[IssuanceGate] = None
_state_path: Optional[Path] = None
_state_file_lock: Optional[FileLock] = None
_init_lock = threading.Lock()


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./allowlist.json
      2. ./.allowlist.json
      3. ~/.config/allowlist/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "allowlist.json",
        Path.cwd() / ".allowlist.json",
        Path.home() / ".config" / "allowlist" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                with open(path) as f:
                    data = json.load(f)
                logger.info(f"Loaded config from {path}")
                config = RuntimeConfig.from_dict(data)
                break
            except (OSError, ValueError, TypeError) as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def _own_state_file(path: Optional[Path]) -> None:
    """
    Release the state file held so far and take the lock on path.

    A running service owns its state file for as long as it serves it, so a
    second worker or a CLI write against the same file is refused instead
    of racing this process. Caller must hold _init_lock.
    """
    global _state_file_lock
    if _state_file_lock is not None:
        _state_file_lock.release()
        _state_file_lock = None
    if path is None:
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    lock = state_lock(path)
    try:
        lock.acquire(timeout=0)
    except Timeout as e:
        raise ServiceNotConfiguredError(
            f"State file is in use by another process: {path}",
            details={"path": str(path)},
        ) from e
    _state_file_lock = lock


def set_gate(gate: Optional[IssuanceGate], state_path: str | Path | None = None) -> None:
    """Install (or clear) the gate served by the API. Used by tests and embedding."""
    global _gate, _state_path
    with _init_lock:
        path = Path(state_path) if state_path else None
        _own_state_file(path)
        _gate = gate
        _state_path = path


def get_gate() -> IssuanceGate:
    """
    Return the process-wide gate, creating it on first use.

    A saved state file takes precedence over the gate section of the config.
    """
    global _gate, _state_path
    if _gate is not None:
        return _gate

    with _init_lock:
        if _gate is not None:
            return _gate

        config = _load_runtime_config()
        state_path = Path(config.service.state_path) if config.service.state_path else None
        _own_state_file(state_path)

        try:
            if state_path is not None and state_path.exists():
                gate = load_state(state_path)
            else:
                try:
                    gate = config.build_gate()
                except ValueError as e:
                    raise ServiceNotConfiguredError(str(e)) from e
        except BaseException:
            _own_state_file(None)
            raise

        _gate = gate
        _state_path = state_path
        return _gate


def persist(gate: IssuanceGate) -> None:
    """
    Write the gate state to the configured state file, if any.

    Call inside gate.transaction() so a failed write also undoes the change.
    """
    if _state_path is not None:
        save_state(gate, _state_path)


def get_caller(
    x_caller_address: Optional[str] = Header(default=None, alias=CALLER_HEADER),
) -> str:
    """
    Resolve the calling identity.

    The header is expected to be set by the authenticating gateway in front
    of this service; it is never taken from the request body.
    """
    if not x_caller_address:
        raise MissingCallerError()
    try:
        return normalize_address(x_caller_address, "caller")
    except SchemaValidationException as e:
        raise InvalidRequestError(e.message, details=e.details) from e
