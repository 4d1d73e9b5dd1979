"""Drive retail flow through a pool and record its trajectory."""

from dataclasses import dataclass, field
from decimal import Decimal
import logging

from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import InvalidSwap
from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.market.retail import RetailTrader

logger = logging.getLogger(__name__)


@dataclass
class StepResult:
    """Pool state after one simulation step."""
    timestamp: int
    reserves: list[Decimal]
    fee_collected: Decimal
    total_volume: Decimal


@dataclass
class SimulationResult:
    market: str
    n_executed: int = 0
    n_rejected: int = 0
    steps: list[StepResult] = field(default_factory=list)

    @property
    def n_orders(self) -> int:
        return self.n_executed + self.n_rejected


def run_simulation(
    engine: PoolEngine,
    market: str,
    trader: RetailTrader,
    n_steps: int,
) -> SimulationResult:
    """Route ``n_steps`` of retail flow through ``engine.swap``.

    Orders the pool rejects as invalid (too small, or large enough to
    exhaust a reserve) are counted and skipped.
    """
    result = SimulationResult(market=market)
    for step in range(n_steps):
        for order in trader.generate_orders():
            try:
                engine.swap(
                    market,
                    order.from_option,
                    order.to_option,
                    Amount.from_tokens(order.size),
                )
                result.n_executed += 1
            except InvalidSwap:
                result.n_rejected += 1

        pool = engine.ledger.get_pool(market)
        result.steps.append(StepResult(
            timestamp=step,
            reserves=pool.reserves_in_tokens(),
            fee_collected=pool.fee_collected.to_tokens(),
            total_volume=pool.total_volume.to_tokens(),
        ))

    logger.info(
        "Simulated %d steps on %s: %d swaps executed, %d rejected",
        n_steps, market, result.n_executed, result.n_rejected,
    )
    return result
