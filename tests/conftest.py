"""
Pytest configuration and shared fixtures for query client tests.

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

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

make_keypair = _common.make_keypair
make_builder = _common.make_builder
make_signed_query = _common.make_signed_query
make_frozen_clock = _common.make_frozen_clock


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def keypair():
    """Provide a deterministic Keypair."""
    return make_keypair()


@pytest.fixture
def other_keypair():
    """Provide a second, different Keypair."""
    return make_keypair(_common.OTHER_SEED)


@pytest.fixture
def builder(keypair):
    """Provide a QueryBuilder with counter=5, created_time=1000."""
    return make_builder(keypair)


@pytest.fixture
def signed_query(keypair):
    """Provide a signed GetAccountAssets query."""
    return make_signed_query(keypair=keypair)


@pytest.fixture
def frozen_clock():
    """Provide a FrozenClock."""
    return make_frozen_clock()


@pytest.fixture(autouse=True)
def _clean_ledgerq_env(monkeypatch):
    """Keep LEDGERQ_* variables from the developer's shell out of tests."""
    import os

    for name in list(os.environ):
        if name.startswith("LEDGERQ_"):
            monkeypatch.delenv(name, raising=False)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
