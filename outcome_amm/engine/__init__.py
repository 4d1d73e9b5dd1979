"""Pool engine and read-only queries."""

from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.engine.queries import PoolQueries, PoolSummary

__all__ = [
    "PoolEngine",
    "PoolQueries",
    "PoolSummary",
]
