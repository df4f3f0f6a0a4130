"""
CLI Read Commands

Status, consumption checks and offline commitment helpers.

Usage:
    allowlist status [--json]
    allowlist check-token <token_id>
    allowlist check-claimant <address>
    allowlist leaf <claimant> <token_id>
    allowlist verify-proof <claimant> <token_id> [--proof 0x... ...] [--root 0x...]
"""

from __future__ import annotations

from argparse import Namespace

from allowlist_cli.commands.common import (
    EXIT_REJECTED,
    EXIT_SUCCESS,
    load_gate,
    print_json,
    read_proof,
    wants_json,
)
from core.admin.controls import validate_root
from core.crypto.hashing import to_hex
from core.crypto.identity import normalize_address
from core.gate.issuance_gate import IssuanceGate, coerce_proof
from core.merkle.leaf import encode_claim, leaf_hash
from core.merkle.merkle_proofs import MerkleProof


def print_status(gate: IssuanceGate, output_json: bool) -> None:
    status = gate.status()
    if output_json:
        print_json({"ok": True, "status": status.model_dump(mode="json")})
        return
    print(f"admin: {status.admin}")
    print(f"commitment_root: {status.commitment_root}")
    print(f"suspended: {str(status.suspended).lower()}")
    print(f"metadata_location: {status.metadata_location}")
    print(f"royalty: {status.royalty.bps} bps -> {status.royalty.recipient}")
    print(f"tokens_claimed: {status.tokens_claimed}")


def status_cmd(args: Namespace) -> int:
    print_status(load_gate(args), wants_json(args))
    return EXIT_SUCCESS


def check_token_cmd(args: Namespace) -> int:
    gate = load_gate(args)
    consumed = gate.is_token_consumed(args.token_id)
    owner = gate.owner_of(args.token_id) if consumed else None
    if wants_json(args):
        print_json({"ok": True, "token_id": args.token_id, "consumed": consumed, "owner": owner})
    else:
        print(f"token {args.token_id}: {'claimed by ' + owner if consumed else 'unclaimed'}")
    return EXIT_SUCCESS


def check_claimant_cmd(args: Namespace) -> int:
    gate = load_gate(args)
    claimant = normalize_address(args.address, "address")
    consumed = gate.is_claimant_consumed(claimant)
    if wants_json(args):
        print_json({"ok": True, "claimant": claimant, "consumed": consumed})
    else:
        print(f"claimant {claimant}: {'claimed' if consumed else 'not claimed'}")
    return EXIT_SUCCESS


def leaf_cmd(args: Namespace) -> int:
    """Compute the leaf commitment; needs no state file."""
    claimant = normalize_address(args.claimant, "claimant")
    encoded = to_hex(encode_claim(claimant, args.token_id))
    leaf = to_hex(leaf_hash(claimant, args.token_id))
    if wants_json(args):
        print_json({
            "ok": True,
            "claimant": claimant,
            "token_id": args.token_id,
            "encoded": encoded,
            "leaf": leaf,
        })
    else:
        print(f"encoded: {encoded}")
        print(f"leaf: {leaf}")
    return EXIT_SUCCESS


def verify_proof_cmd(args: Namespace) -> int:
    """
    Check a proof without claiming.

    Uses --root when given, otherwise the root stored in the state file.
    """
    proof = read_proof(args)
    if args.root:
        checked = MerkleProof(
            leaf=leaf_hash(args.claimant, args.token_id),
            siblings=coerce_proof(proof),
            root=validate_root(args.root),
        )
    else:
        checked = load_gate(args).check_proof(args.claimant, args.token_id, proof)
    valid = checked.verify()

    if wants_json(args):
        print_json({
            "ok": True,
            "valid": valid,
            "leaf": to_hex(checked.leaf),
            "root": to_hex(checked.root),
        })
    else:
        print(f"leaf: {to_hex(checked.leaf)}")
        print(f"root: {to_hex(checked.root)}")
        print(f"valid: {str(valid).lower()}")
    return EXIT_SUCCESS if valid else EXIT_REJECTED
