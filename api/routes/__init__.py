"""API route handlers."""

from api.routes import admin, claims, health, tokens

__all__ = ["admin", "claims", "health", "tokens"]
