"""
Runtime Configuration

Central configuration for gate initialization and service setup.
"""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()


ENV_PREFIX = "ALLOWLIST_"


def _env_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class GateConfig:
    """Initialization parameters for the issuance gate."""
    admin: Optional[str] = None
    commitment_root: Optional[str] = None
    metadata_location: str = ""
    royalty_recipient: Optional[str] = None
    royalty_bps: int = 0
    paused: bool = False


@dataclass
class ServiceConfig:
    """Configuration for the HTTP service and state persistence."""
    state_path: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables (a .env file is read on import)
    - YAML or JSON file
    - Programmatic construction
    """
    gate: GateConfig = field(default_factory=GateConfig)
    service: ServiceConfig = field(default_factory=ServiceConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - ALLOWLIST_ADMIN: privileged identity address
        - ALLOWLIST_ROOT: initial commitment root (0x-prefixed)
        - ALLOWLIST_METADATA_LOCATION: metadata base location
        - ALLOWLIST_ROYALTY_RECIPIENT: royalty recipient address
        - ALLOWLIST_ROYALTY_BPS: royalty rate in basis points
        - ALLOWLIST_PAUSED: start with claims suspended (true/false)
        - ALLOWLIST_STATE_PATH: JSON state snapshot path
        - ALLOWLIST_HOST / ALLOWLIST_PORT: HTTP bind address
        - ALLOWLIST_LOG_LEVEL: log level
        """
        overrides: dict[str, Any] = {}

        gate_vars = {
            "ADMIN": "admin",
            "ROOT": "commitment_root",
            "METADATA_LOCATION": "metadata_location",
            "ROYALTY_RECIPIENT": "royalty_recipient",
        }
        for suffix, key in gate_vars.items():
            value = os.getenv(f"{ENV_PREFIX}{suffix}")
            if value:
                overrides.setdefault("gate", {})[key] = value
        if os.getenv(f"{ENV_PREFIX}ROYALTY_BPS"):
            overrides.setdefault("gate", {})["royalty_bps"] = int(
                os.getenv(f"{ENV_PREFIX}ROYALTY_BPS", "0")
            )
        if os.getenv(f"{ENV_PREFIX}PAUSED"):
            overrides.setdefault("gate", {})["paused"] = _env_bool(
                os.getenv(f"{ENV_PREFIX}PAUSED", "false")
            )

        if os.getenv(f"{ENV_PREFIX}STATE_PATH"):
            overrides.setdefault("service", {})["state_path"] = os.getenv(
                f"{ENV_PREFIX}STATE_PATH"
            )
        if os.getenv(f"{ENV_PREFIX}HOST"):
            overrides.setdefault("service", {})["host"] = os.getenv(f"{ENV_PREFIX}HOST")
        if os.getenv(f"{ENV_PREFIX}PORT"):
            overrides.setdefault("service", {})["port"] = int(
                os.getenv(f"{ENV_PREFIX}PORT", "8000")
            )
        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("service", {})["log_level"] = os.getenv(
                f"{ENV_PREFIX}LOG_LEVEL"
            )

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML (or JSON) file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        gate_data = dict(data.get("gate", {}) or {})
        # Unquoted 0x values in YAML load as integers.
        for key, width in (
            ("admin", 20),
            ("royalty_recipient", 20),
            ("commitment_root", 32),
        ):
            if isinstance(gate_data.get(key), int):
                gate_data[key] = "0x" + gate_data[key].to_bytes(width, "big").hex()
        service_data = data.get("service", {}) or {}

        gate = GateConfig(**gate_data) if gate_data else GateConfig()
        service = ServiceConfig(**service_data) if service_data else ServiceConfig()

        return cls(
            gate=gate,
            service=service,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.get("gate", {}).items():
            setattr(new_config.gate, key, value)
        for key, value in overrides.get("service", {}).items():
            setattr(new_config.service, key, value)
        return new_config

    def build_gate(self):
        """
        Create an IssuanceGate from the gate section.

        Raises:
            ValueError: If admin or commitment_root is not configured
            InvalidRootException: If the root is zero or malformed
        """
        from core.gate.issuance_gate import IssuanceGate

        if not self.gate.admin:
            raise ValueError(f"{ENV_PREFIX}ADMIN (gate.admin) is not configured")
        if not self.gate.commitment_root:
            raise ValueError(f"{ENV_PREFIX}ROOT (gate.commitment_root) is not configured")

        return IssuanceGate.create(
            admin=self.gate.admin,
            commitment_root=self.gate.commitment_root,
            metadata_location=self.gate.metadata_location,
            royalty_recipient=self.gate.royalty_recipient,
            royalty_bps=self.gate.royalty_bps,
            suspended=self.gate.paused,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "gate": {
                "admin": self.gate.admin,
                "commitment_root": self.gate.commitment_root,
                "metadata_location": self.gate.metadata_location,
                "royalty_recipient": self.gate.royalty_recipient,
                "royalty_bps": self.gate.royalty_bps,
                "paused": self.gate.paused,
            },
            "service": {
                "state_path": self.service.state_path,
                "host": self.service.host,
                "port": self.service.port,
                "log_level": self.service.log_level,
            },
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or clear) the default runtime configuration."""
    global _default_config
    _default_config = config
