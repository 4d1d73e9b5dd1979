"""Multi-outcome constant-product AMM for prediction-market options."""

from outcome_amm.config import PoolParameters
from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import AMMError
from outcome_amm.core.pool import LiquidityPool, LPPosition
from outcome_amm.engine.pool_engine import PoolEngine

__all__ = [
    "PoolParameters",
    "Amount",
    "AMMError",
    "LiquidityPool",
    "LPPosition",
    "PoolEngine",
]
