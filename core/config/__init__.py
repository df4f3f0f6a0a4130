"""
Runtime Configuration Module

Provides configuration loading and management for the allowlist service.
"""

from .runtime import (
    ENV_PREFIX,
    GateConfig,
    RuntimeConfig,
    ServiceConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "ENV_PREFIX",
    "GateConfig",
    "RuntimeConfig",
    "ServiceConfig",
    "get_default_config",
    "set_default_config",
]
