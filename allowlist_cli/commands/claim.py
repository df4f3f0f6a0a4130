"""
CLI Claim Command

Claim a token for the calling identity against the stored commitment root.

Usage:
    allowlist claim <token_id> --caller 0x... [--proof 0x... ...] [--proof-file proof.json] [--json]
"""

from __future__ import annotations

import logging
from argparse import Namespace

from allowlist_cli.commands.common import (
    EXIT_REJECTED,
    EXIT_SUCCESS,
    print_json,
    print_rejection,
    read_proof,
    state_session,
    wants_json,
)
from core.schemas.errors import AllowlistException
from core.state.store import StateIOError


logger = logging.getLogger(__name__)


def claim_cmd(args: Namespace) -> int:
    """
    Execute the claim command.

    The state file stays locked from load to save, and is left untouched
    when the claim is rejected.

    Returns:
        EXIT_SUCCESS on an accepted claim, EXIT_REJECTED on a rejection
    """
    output_json = wants_json(args)
    proof = read_proof(args)

    try:
        with state_session(args) as gate:
            receipt = gate.claim(args.caller, args.token_id, proof)
    except StateIOError:
        raise
    except AllowlistException as e:
        print_rejection(e, output_json)
        return EXIT_REJECTED

    if output_json:
        print_json({"ok": True, "receipt": receipt.model_dump(mode="json")})
    else:
        print(f"claimed: token {receipt.token_id}")
        print(f"claimant: {receipt.claimant}")
        print(f"leaf: {receipt.leaf}")
        print(f"root: {receipt.root}")
    return EXIT_SUCCESS
