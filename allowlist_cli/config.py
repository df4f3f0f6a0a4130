"""
CLI Configuration

Configuration management for the allowlist CLI.
Supports environment variables and configuration files.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from core.state.store import DEFAULT_LOCK_TIMEOUT


# Environment variable prefix
ENV_PREFIX = "ALLOWLIST_"

DEFAULT_STATE_PATH = "allowlist_state.json"


@dataclass
class CLIConfig:
    """Main CLI configuration."""

    # State snapshot read and written by every command
    state_path: str = DEFAULT_STATE_PATH

    # Seconds to wait for another process holding the state file
    lock_timeout: float = DEFAULT_LOCK_TIMEOUT

    # Logging
    log_level: str = "INFO"
    log_file: str | None = None

    # Output
    default_output_format: str = "human"  # "human" or "json"


def load_config_from_env() -> CLIConfig:
    """Load configuration from environment variables."""
    config = CLIConfig()

    config.state_path = os.getenv(f"{ENV_PREFIX}STATE_PATH", DEFAULT_STATE_PATH)
    config.lock_timeout = float(os.getenv(f"{ENV_PREFIX}LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT))
    config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", "INFO")
    config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")
    config.default_output_format = os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT", "human")

    return config


def load_config_from_file(path: Path) -> CLIConfig:
    """Load configuration from a JSON file."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r") as f:
        data = json.load(f)

    config = CLIConfig()
    # The API's "service" section is honoured so both tools share one file.
    service = data.get("service") or {}
    config.state_path = (
        data.get("state_path") or service.get("state_path") or config.state_path
    )
    config.lock_timeout = float(data.get("lock_timeout", config.lock_timeout))
    config.log_level = data.get("log_level", config.log_level)
    config.log_file = data.get("log_file", config.log_file)
    config.default_output_format = data.get(
        "default_output_format", config.default_output_format
    )
    return config


def load_config(config_path: Path | None = None) -> CLIConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = CLIConfig()

    if config_path and config_path.exists():
        config = load_config_from_file(config_path)

    default_paths = [
        Path.cwd() / "allowlist.json",
        Path.cwd() / ".allowlist.json",
        Path.home() / ".config" / "allowlist" / "config.json",
    ]

    if config_path is None:
        for default_path in default_paths:
            if default_path.exists():
                config = load_config_from_file(default_path)
                break

    env_config = load_config_from_env()

    if os.getenv(f"{ENV_PREFIX}STATE_PATH"):
        config.state_path = env_config.state_path
    if os.getenv(f"{ENV_PREFIX}LOCK_TIMEOUT"):
        config.lock_timeout = env_config.lock_timeout
    if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
        config.log_level = env_config.log_level
    if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
        config.log_file = env_config.log_file
    if os.getenv(f"{ENV_PREFIX}OUTPUT_FORMAT"):
        config.default_output_format = env_config.default_output_format

    return config


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "state_path": "allowlist_state.json",
  "lock_timeout": 10.0,
  "log_level": "INFO",
  "log_file": null,
  "default_output_format": "human"
}
"""
