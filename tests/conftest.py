"""Pytest configuration and shared fixtures for pool engine tests.

This module provides:
- Pytest markers for test categorization
- Shared engine and pool fixtures
"""

from decimal import Decimal

import pytest

from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.ledger.sqlite import SQLiteLedger
from tests.fixtures.pool_fixtures import PoolProfile, create_engine, create_pool


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "economic: Core economic property tests (invariants, shares, fees)"
    )
    config.addinivalue_line(
        "markers", "edge_case: Edge case and stress tests with extreme inputs"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests spanning multiple components"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location and name."""
    for item in items:
        if "edge_case" in item.nodeid or "edge_case" in item.name:
            item.add_marker(pytest.mark.edge_case)

        if any(keyword in item.nodeid for keyword in ["invariant", "simulation", "sqlite", "cli"]):
            item.add_marker(pytest.mark.integration)

        if any(keyword in item.nodeid for keyword in ["invariant", "shares", "fees", "pricing"]):
            item.add_marker(pytest.mark.economic)


# ============================================================================
# Engine Fixtures
# ============================================================================


@pytest.fixture
def engine() -> PoolEngine:
    """Engine with 30bps fees over an empty in-memory ledger."""
    return create_engine()


@pytest.fixture
def one_percent_engine() -> PoolEngine:
    """Engine with 1% fees over an empty in-memory ledger."""
    return create_engine(fee_rate=Decimal("0.01"))


@pytest.fixture
def binary_engine(engine) -> PoolEngine:
    """30bps engine holding a 2-option pool "market" with reserves 500 / 500."""
    create_pool(engine, "market", PoolProfile.BINARY)
    engine.outbox.drain()
    return engine


@pytest.fixture
def ternary_engine(engine) -> PoolEngine:
    """30bps engine holding a 3-option pool "market" with reserves 300 / 300 / 300."""
    create_pool(engine, "market", PoolProfile.TERNARY)
    engine.outbox.drain()
    return engine


@pytest.fixture
def sqlite_ledger(tmp_path) -> SQLiteLedger:
    """SQLite ledger in a temporary directory."""
    return SQLiteLedger(str(tmp_path / "pools.db"))


@pytest.fixture
def fixed_seed() -> int:
    """Fixed random seed for deterministic tests."""
    return 42
