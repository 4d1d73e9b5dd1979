"""Market simulation components."""

from outcome_amm.market.retail import RetailTrader, SwapOrder
from outcome_amm.market.simulation import SimulationResult, StepResult, run_simulation

__all__ = [
    "RetailTrader",
    "SwapOrder",
    "SimulationResult",
    "StepResult",
    "run_simulation",
]
