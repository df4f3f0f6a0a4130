"""
Pytest configuration and shared fixtures for allowlist tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_allowlist = importlib.import_module("fixtures.allowlist")

make_allowlist = _allowlist.make_allowlist
make_gate = _allowlist.make_gate


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def allowlist():
    """Provide the default five-entry allowlist tree."""
    return make_allowlist()


@pytest.fixture
def gate(allowlist):
    """Provide an unpaused IssuanceGate committed to the default tree."""
    return make_gate(allowlist)


@pytest.fixture
def paused_gate(allowlist):
    """Provide an IssuanceGate that starts with claims suspended."""
    return make_gate(allowlist, suspended=True)


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Clear ALLOWLIST_* variables and run from an empty directory."""
    import os

    for key in list(os.environ):
        if key.startswith("ALLOWLIST_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


# =============================================================================
# Test Helpers (available to all tests via fixtures)
# =============================================================================

@pytest.fixture
def assert_rejected():
    """Helper to assert an AllowlistException carries the expected code."""
    def _assert(excinfo, code: str):
        assert excinfo.value.code == code, (
            f"Expected error code '{code}', got '{excinfo.value.code}': {excinfo.value.message}"
        )
    return _assert
