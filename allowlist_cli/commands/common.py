"""
Shared helpers for CLI commands.
"""

from __future__ import annotations

import json
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, ContextManager

from core.gate.issuance_gate import IssuanceGate
from core.state.store import DEFAULT_LOCK_TIMEOUT, load_state, locked_state


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_REJECTED = 2


def state_path(args: Namespace) -> Path:
    """Resolve the state file from --state or the CLI config."""
    explicit = getattr(args, "state", None)
    if explicit:
        return Path(explicit)
    return Path(args.cli_config.state_path)


def lock_timeout(args: Namespace) -> float:
    config = getattr(args, "cli_config", None)
    return config.lock_timeout if config is not None else DEFAULT_LOCK_TIMEOUT


def load_gate(args: Namespace) -> IssuanceGate:
    return load_state(state_path(args))


def state_session(args: Namespace) -> ContextManager[IssuanceGate]:
    """
    Lock the state file, load it, and save it when the block succeeds.

    Used by every command that changes state, so concurrent runs against
    the same file serialize instead of overwriting each other.
    """
    return locked_state(state_path(args), timeout=lock_timeout(args))


def wants_json(args: Namespace) -> bool:
    if getattr(args, "json", False):
        return True
    config = getattr(args, "cli_config", None)
    return config is not None and config.default_output_format == "json"


def read_proof(args: Namespace) -> list[str]:
    """
    Collect proof elements from --proof values or a --proof-file.

    The file holds either a JSON list of hex strings or an object with a
    "proof" list (the shape most tree-building tools export per entry).
    """
    proof = list(getattr(args, "proof", None) or [])
    proof_file = getattr(args, "proof_file", None)
    if proof_file:
        data: Any = json.loads(Path(proof_file).read_text(encoding="utf-8"))
        if isinstance(data, dict):
            data = data.get("proof", [])
        if not isinstance(data, list):
            raise ValueError(f"Proof file must contain a list: {proof_file}")
        proof.extend(str(p) for p in data)
    return proof


def print_rejection(exc, as_json: bool) -> None:
    """Report a rejected operation (AllowlistException)."""
    if as_json:
        print(json.dumps(
            {"ok": False, "error": exc.to_error_model().model_dump()}, indent=2
        ))
    else:
        print(f"rejected: {exc.code}: {exc.message}", file=sys.stderr)


def print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))
