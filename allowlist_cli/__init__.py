"""
Allowlist CLI

Command-line interface for the allowlist issuance gate. Commands operate
on a JSON state file.

Usage:
    python -m allowlist_cli init --admin 0x... --root 0x... --metadata ipfs://base/
    python -m allowlist_cli claim 7 --caller 0x... --proof 0x... 0x...
    python -m allowlist_cli status
    python -m allowlist_cli leaf 0x... 7
    python -m allowlist_cli pause --caller 0x...
"""

__version__ = "0.1.0"
