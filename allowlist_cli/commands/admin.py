"""
CLI Admin Commands

Initialize a state file and run admin-gated mutations.

Usage:
    allowlist init --admin 0x... --root 0x... [--metadata LOC] [--royalty-recipient 0x...] [--royalty-bps N] [--paused]
    allowlist set-root <root> --caller 0x...
    allowlist pause --caller 0x...
    allowlist unpause --caller 0x...
    allowlist set-metadata <location> --caller 0x...
    allowlist transfer-admin <new_admin> --caller 0x...
"""

from __future__ import annotations

import logging
import sys
from argparse import Namespace
from typing import Callable

from allowlist_cli.commands.common import (
    EXIT_REJECTED,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    lock_timeout,
    print_rejection,
    state_path,
    state_session,
    wants_json,
)
from allowlist_cli.commands.queries import print_status
from core.gate.issuance_gate import IssuanceGate
from core.schemas.errors import AllowlistException
from core.state.store import StateIOError, hold_state_lock, save_state


logger = logging.getLogger(__name__)


def init_cmd(args: Namespace) -> int:
    """Create a new state file from initialization parameters."""
    path = state_path(args)
    output_json = wants_json(args)

    with hold_state_lock(path, timeout=lock_timeout(args)):
        if path.exists() and not args.force:
            print(f"Error: State file already exists: {path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        try:
            gate = IssuanceGate.create(
                admin=args.admin,
                commitment_root=args.root,
                metadata_location=args.metadata,
                royalty_recipient=args.royalty_recipient,
                royalty_bps=args.royalty_bps,
                suspended=args.paused,
            )
        except AllowlistException as e:
            print_rejection(e, output_json)
            return EXIT_REJECTED
        save_state(gate, path)

    logger.info(f"Initialized state at {path}")
    print_status(gate, output_json)
    return EXIT_SUCCESS


def _run_admin(args: Namespace, action: Callable[[IssuanceGate], object]) -> int:
    output_json = wants_json(args)
    try:
        with state_session(args) as gate:
            action(gate)
    except StateIOError:
        raise
    except AllowlistException as e:
        print_rejection(e, output_json)
        return EXIT_REJECTED
    print_status(gate, output_json)
    return EXIT_SUCCESS


def set_root_cmd(args: Namespace) -> int:
    return _run_admin(args, lambda g: g.set_commitment_root(args.caller, args.root))


def pause_cmd(args: Namespace) -> int:
    return _run_admin(args, lambda g: g.pause(args.caller))


def unpause_cmd(args: Namespace) -> int:
    return _run_admin(args, lambda g: g.unpause(args.caller))


def set_metadata_cmd(args: Namespace) -> int:
    return _run_admin(args, lambda g: g.set_metadata_location(args.caller, args.location))


def transfer_admin_cmd(args: Namespace) -> int:
    return _run_admin(args, lambda g: g.transfer_admin(args.caller, args.new_admin))
