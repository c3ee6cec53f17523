"""
Pytest configuration and shared fixtures for MCM compiler tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import json
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

_common = importlib.import_module("fixtures.common")

make_account = _common.make_account
make_operation = _common.make_operation
make_root_metadata = _common.make_root_metadata
make_proposal = _common.make_proposal
make_proposal_dict = _common.make_proposal_dict


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def proposal():
    """Provide a default two-operation Proposal."""
    return make_proposal()


@pytest.fixture
def root_metadata():
    """Provide default RootMetadata."""
    return make_root_metadata()


@pytest.fixture
def operation():
    """Provide a default Operation."""
    return make_operation()


@pytest.fixture
def proposal_file(tmp_path):
    """Write a valid proposal JSON file and return its path."""
    path = tmp_path / "proposal.json"
    path.write_text(json.dumps(make_proposal_dict()))
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep MCM_* variables and config files of the host out of tests."""
    for name in ("MCM_LOG_LEVEL", "MCM_LOG_FILE", "MCM_OUTPUT_FORMAT", "MCM_MAX_WORKERS"):
        # setenv first so teardown also removes values a .env file loaded
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
