"""
CLI command modules.
"""

from allowlist_cli.commands import admin, claim, common, queries

__all__ = ["admin", "claim", "common", "queries"]
