"""Test fixtures for pool engine testing."""

from tests.fixtures.pool_fixtures import (
    CREATOR,
    PoolProfile,
    PoolSnapshot,
    counting_clock,
    create_engine,
    create_pool,
    snapshot_pool,
    tokens,
)

__all__ = [
    "CREATOR",
    "PoolProfile",
    "PoolSnapshot",
    "counting_clock",
    "create_engine",
    "create_pool",
    "snapshot_pool",
    "tokens",
]
