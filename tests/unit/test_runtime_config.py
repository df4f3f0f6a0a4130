"""
Runtime Configuration Unit Tests
Tests for core/config/runtime.py
"""
import pytest

from core.config.runtime import (
    RuntimeConfig,
    get_default_config,
    set_default_config,
)
from core.crypto.identity import normalize_address
from core.schemas.errors import InvalidRootException

from fixtures.allowlist import ADMIN, make_allowlist


class TestFromDict:

    def test_defaults(self):
        config = RuntimeConfig.from_dict({})
        assert config.gate.admin is None
        assert config.service.port == 8000
        assert config.service.state_path is None

    def test_partial_sections(self):
        config = RuntimeConfig.from_dict({
            "gate": {"admin": ADMIN, "royalty_bps": 250},
            "service": {"port": 9001},
        })
        assert config.gate.royalty_bps == 250
        assert config.service.port == 9001
        assert config.service.host == "127.0.0.1"

    def test_integer_hex_values_from_yaml(self):
        config = RuntimeConfig.from_dict({"gate": {"admin": 0xAD, "commitment_root": 1}})
        assert config.gate.admin == "0x" + "00" * 19 + "ad"
        assert config.gate.commitment_root == "0x" + "00" * 31 + "01"

    def test_to_dict_round_trip(self):
        config = RuntimeConfig.from_dict({"gate": {"admin": ADMIN, "paused": True}})
        assert RuntimeConfig.from_dict(config.to_dict()).gate.paused is True


class TestEnvOverrides:

    def test_from_env(self, isolated_env, monkeypatch):
        monkeypatch.setenv("ALLOWLIST_ADMIN", ADMIN)
        monkeypatch.setenv("ALLOWLIST_ROYALTY_BPS", "300")
        monkeypatch.setenv("ALLOWLIST_PAUSED", "yes")
        monkeypatch.setenv("ALLOWLIST_PORT", "9100")
        config = RuntimeConfig.from_env()
        assert config.gate.admin == ADMIN
        assert config.gate.royalty_bps == 300
        assert config.gate.paused is True
        assert config.service.port == 9100

    def test_env_overrides_file_values(self, isolated_env, monkeypatch):
        base = RuntimeConfig.from_dict({"gate": {"metadata_location": "file://"}})
        monkeypatch.setenv("ALLOWLIST_METADATA_LOCATION", "env://")
        assert base.with_env_overrides().gate.metadata_location == "env://"
        assert base.gate.metadata_location == "file://"

    def test_no_overrides_returns_same(self, isolated_env):
        base = RuntimeConfig()
        assert base.with_env_overrides() is base


class TestFromYaml:

    def test_load(self, tmp_path):
        path = tmp_path / "allowlist.yaml"
        path.write_text(
            "gate:\n"
            f"  admin: '{ADMIN}'\n"
            "  royalty_bps: 100\n"
            "service:\n"
            "  state_path: state.json\n"
        )
        config = RuntimeConfig.from_yaml(path)
        assert config.gate.royalty_bps == 100
        assert config.service.state_path == "state.json"

    def test_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuntimeConfig.from_yaml(tmp_path / "nope.yaml")


class TestBuildGate:

    def test_builds_gate(self):
        allowlist = make_allowlist()
        config = RuntimeConfig.from_dict({
            "gate": {
                "admin": ADMIN,
                "commitment_root": allowlist.hex_root,
                "royalty_bps": 1000,
                "paused": True,
            }
        })
        gate = config.build_gate()
        status = gate.status()
        assert status.admin == normalize_address(ADMIN)
        assert status.suspended
        assert status.royalty.bps == 1000

    def test_requires_admin_and_root(self):
        with pytest.raises(ValueError, match="ADMIN"):
            RuntimeConfig().build_gate()
        with pytest.raises(ValueError, match="ROOT"):
            RuntimeConfig.from_dict({"gate": {"admin": ADMIN}}).build_gate()

    def test_zero_root(self):
        config = RuntimeConfig.from_dict({
            "gate": {"admin": ADMIN, "commitment_root": "0x" + "00" * 32}
        })
        with pytest.raises(InvalidRootException):
            config.build_gate()


class TestDefaultConfig:

    def test_set_and_clear(self, isolated_env):
        custom = RuntimeConfig.from_dict({"service": {"port": 1234}})
        set_default_config(custom)
        try:
            assert get_default_config() is custom
        finally:
            set_default_config(None)
        assert get_default_config().service.port == 8000
        set_default_config(None)
