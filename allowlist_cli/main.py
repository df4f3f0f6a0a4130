"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    allowlist init --admin 0x... --root 0x... [--metadata LOC] [--royalty-recipient 0x...] [--royalty-bps N]
    allowlist claim <token_id> --caller 0x... --proof 0x... [0x... ...]
    allowlist status [--json]
    allowlist check-token <token_id>
    allowlist check-claimant <address>
    allowlist leaf <claimant> <token_id>
    allowlist verify-proof <claimant> <token_id> --proof 0x... [--root 0x...]
    allowlist set-root <root> --caller 0x...
    allowlist pause|unpause --caller 0x...
    allowlist set-metadata <location> --caller 0x...
    allowlist transfer-admin <new_admin> --caller 0x...
    allowlist config --init|--show

Environment Variables:
    ALLOWLIST_STATE_PATH        State snapshot file (default: allowlist_state.json)
    ALLOWLIST_LOCK_TIMEOUT      Seconds to wait for a locked state file (default: 10)
    ALLOWLIST_LOG_LEVEL         Log level (default: INFO)
    ALLOWLIST_LOG_FILE          Optional log file
    ALLOWLIST_OUTPUT_FORMAT     human or json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

from allowlist_cli import __version__
from allowlist_cli.commands import admin, claim, queries
from allowlist_cli.commands.common import (
    EXIT_REJECTED,
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    print_rejection,
)
from allowlist_cli.config import get_default_config_template, load_config
from core.schemas.errors import AllowlistException
from core.state.store import StateIOError


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
    )


def token_id_arg(value: str) -> int:
    """Parse a token id given in decimal or 0x-hex."""
    try:
        return int(value, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid token id: {value!r}")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--state",
        type=str,
        default=None,
        help="State file (overrides config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output machine-readable JSON",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on errors",
    )


def _add_caller_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--caller",
        type=str,
        required=True,
        help="Calling identity address",
    )


def _add_proof_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--proof", "-p",
        nargs="*",
        default=[],
        help="Proof elements as 0x-prefixed 32-byte hex, leaf side first",
    )
    parser.add_argument(
        "--proof-file",
        type=str,
        default=None,
        help="JSON file with a list of proof elements (or {\"proof\": [...]})",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="allowlist",
        description="Merkle allowlist claim engine - claim tokens, inspect state and run admin controls.",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to configuration file (default: ./allowlist.json or ~/.config/allowlist/config.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- init command ---
    init_parser = subparsers.add_parser(
        "init",
        help="Create a new state file",
        description="Initialize the gate with an admin, a commitment root and royalty settings.",
    )
    init_parser.add_argument("--admin", type=str, required=True, help="Privileged identity address")
    init_parser.add_argument("--root", type=str, required=True, help="Commitment root (0x-prefixed 32 bytes)")
    init_parser.add_argument("--metadata", type=str, default="", help="Metadata location")
    init_parser.add_argument("--royalty-recipient", type=str, default=None, help="Royalty recipient (default: admin)")
    init_parser.add_argument("--royalty-bps", type=int, default=0, help="Royalty rate in basis points")
    init_parser.add_argument("--paused", action="store_true", default=False, help="Start with claims suspended")
    init_parser.add_argument("--force", action="store_true", default=False, help="Overwrite an existing state file")
    _add_output_args(init_parser)
    init_parser.set_defaults(func=admin.init_cmd)

    # --- claim command ---
    claim_parser = subparsers.add_parser(
        "claim",
        help="Claim a token with an inclusion proof",
        description="Claim a token for the caller. Exit code 2 when the claim is rejected.",
    )
    claim_parser.add_argument("token_id", type=token_id_arg, help="Token identifier")
    _add_caller_arg(claim_parser)
    _add_proof_args(claim_parser)
    _add_output_args(claim_parser)
    claim_parser.set_defaults(func=claim.claim_cmd)

    # --- read commands ---
    status_parser = subparsers.add_parser("status", help="Show gate state")
    _add_output_args(status_parser)
    status_parser.set_defaults(func=queries.status_cmd)

    check_token_parser = subparsers.add_parser("check-token", help="Check whether a token was claimed")
    check_token_parser.add_argument("token_id", type=token_id_arg, help="Token identifier")
    _add_output_args(check_token_parser)
    check_token_parser.set_defaults(func=queries.check_token_cmd)

    check_claimant_parser = subparsers.add_parser("check-claimant", help="Check whether an address has claimed")
    check_claimant_parser.add_argument("address", type=str, help="Claimant address")
    _add_output_args(check_claimant_parser)
    check_claimant_parser.set_defaults(func=queries.check_claimant_cmd)

    leaf_parser = subparsers.add_parser(
        "leaf",
        help="Compute the leaf commitment for a (claimant, token) pair",
    )
    leaf_parser.add_argument("claimant", type=str, help="Claimant address")
    leaf_parser.add_argument("token_id", type=token_id_arg, help="Token identifier")
    _add_output_args(leaf_parser)
    leaf_parser.set_defaults(func=queries.leaf_cmd)

    verify_parser = subparsers.add_parser(
        "verify-proof",
        help="Check an inclusion proof without claiming",
        description="Exit code 2 when the proof does not verify.",
    )
    verify_parser.add_argument("claimant", type=str, help="Claimant address")
    verify_parser.add_argument("token_id", type=token_id_arg, help="Token identifier")
    verify_parser.add_argument("--root", type=str, default=None, help="Root to check against (default: stored root)")
    _add_proof_args(verify_parser)
    _add_output_args(verify_parser)
    verify_parser.set_defaults(func=queries.verify_proof_cmd)

    # --- admin commands ---
    set_root_parser = subparsers.add_parser("set-root", help="Replace the commitment root")
    set_root_parser.add_argument("root", type=str, help="New root (0x-prefixed 32 bytes)")
    _add_caller_arg(set_root_parser)
    _add_output_args(set_root_parser)
    set_root_parser.set_defaults(func=admin.set_root_cmd)

    pause_parser = subparsers.add_parser("pause", help="Suspend claiming")
    _add_caller_arg(pause_parser)
    _add_output_args(pause_parser)
    pause_parser.set_defaults(func=admin.pause_cmd)

    unpause_parser = subparsers.add_parser("unpause", help="Resume claiming")
    _add_caller_arg(unpause_parser)
    _add_output_args(unpause_parser)
    unpause_parser.set_defaults(func=admin.unpause_cmd)

    metadata_parser = subparsers.add_parser("set-metadata", help="Set the metadata location")
    metadata_parser.add_argument("location", type=str, help="New metadata location")
    _add_caller_arg(metadata_parser)
    _add_output_args(metadata_parser)
    metadata_parser.set_defaults(func=admin.set_metadata_cmd)

    transfer_parser = subparsers.add_parser("transfer-admin", help="Hand the admin role to another address")
    transfer_parser.add_argument("new_admin", type=str, help="New admin address")
    _add_caller_arg(transfer_parser)
    _add_output_args(transfer_parser)
    transfer_parser.set_defaults(func=admin.transfer_admin_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Manage CLI configuration",
        description="Initialize or display configuration.",
    )
    config_parser.add_argument(
        "--init",
        action="store_true",
        default=False,
        help="Create a template configuration file",
    )
    config_parser.add_argument(
        "--show",
        action="store_true",
        default=False,
        help="Show current configuration",
    )
    config_parser.add_argument(
        "--path",
        type=str,
        default="allowlist.json",
        help="Path for config file (default: allowlist.json)",
    )
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Handle config command."""
    if args.init:
        config_path = Path(args.path)
        if config_path.exists():
            print(f"Error: Config file already exists: {config_path}", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
        config_path.write_text(get_default_config_template())
        print(f"Created configuration file: {config_path}")
        print("\nEdit this file to configure your settings.")
        print("You can also use environment variables (ALLOWLIST_* prefix).")
        return EXIT_SUCCESS

    if args.show:
        config = args.cli_config
        print(json.dumps({
            "state_path": config.state_path,
            "lock_timeout": config.lock_timeout,
            "log_level": config.log_level,
            "log_file": config.log_file,
            "default_output_format": config.default_output_format,
        }, indent=2))
        return EXIT_SUCCESS

    print("Usage: allowlist config [--init|--show]")
    print("  --init  Create a template configuration file")
    print("  --show  Show current configuration")
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0=success, 1=error, 2=rejected)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    log_level = args.log_level or config.log_level
    setup_logging(level=log_level, log_file=config.log_file)

    # Attach config to args for commands to use
    args.cli_config = config

    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except StateIOError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except AllowlistException as e:
        print_rejection(e, getattr(args, "json", False))
        return EXIT_REJECTED
    except Exception as e:
        if getattr(args, "debug", False):
            traceback.print_exc()
        else:
            print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())
