"""Core AMM components."""

from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import (
    AMMError,
    InsufficientLiquidity,
    InvalidSwap,
    MinLiquidityNotMet,
    PoolAlreadyExists,
    PoolNotFound,
    SlippageTooHigh,
)
from outcome_amm.core.events import (
    LiquidityAdded,
    LiquidityRemoved,
    Outbox,
    PoolCreated,
    SwapExecuted,
)
from outcome_amm.core.pool import LiquidityPool, LPPosition, Withdrawal
from outcome_amm.core.pricing import SwapQuote, quote_swap

__all__ = [
    "Amount",
    "AMMError",
    "InsufficientLiquidity",
    "InvalidSwap",
    "MinLiquidityNotMet",
    "PoolAlreadyExists",
    "PoolNotFound",
    "SlippageTooHigh",
    "LiquidityAdded",
    "LiquidityRemoved",
    "Outbox",
    "PoolCreated",
    "SwapExecuted",
    "LiquidityPool",
    "LPPosition",
    "Withdrawal",
    "SwapQuote",
    "quote_swap",
]
