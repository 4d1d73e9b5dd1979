"""Read-only views over the pool ledger."""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Optional

from outcome_amm.core.amount import PRECISION, Amount
from outcome_amm.core.errors import InvalidSwap, PoolNotFound
from outcome_amm.core.pool import LiquidityPool, LPPosition
from outcome_amm.core.pricing import implied_probabilities
from outcome_amm.ledger.base import Ledger


@dataclass(frozen=True)
class PoolSummary:
    """Display-ready snapshot of one pool."""
    market: str
    num_options: int
    reserves: list[Decimal]
    probabilities: list[Decimal]
    total_liquidity: Decimal
    fee_collected: Decimal
    total_volume: Decimal
    n_providers: int


class PoolQueries:
    """Queries that never mutate the ledger."""

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def pool(self, market: str) -> LiquidityPool:
        pool = self.ledger.get_pool(market)
        if pool is None:
            raise PoolNotFound(market)
        return pool

    def position(self, market: str, provider: str) -> Optional[LPPosition]:
        return self.ledger.get_position(market, provider)

    def implied_probabilities(self, market: str) -> list[Decimal]:
        return implied_probabilities(self.pool(market).option_reserves)

    def spot_price(self, market: str, from_option: int, to_option: int) -> Decimal:
        """Marginal units of ``to_option`` per unit of ``from_option``, before fees."""
        pool = self.pool(market)
        for index in (from_option, to_option):
            if not pool.has_option(index):
                raise InvalidSwap(f"option {index} out of range for {pool.num_options} options")
        from_reserve = pool.option_reserves[from_option]
        if from_reserve.is_zero():
            return Decimal("0")
        with localcontext() as ctx:
            ctx.prec = PRECISION
            return pool.option_reserves[to_option].to_tokens() / from_reserve.to_tokens()

    def position_value(self, market: str, provider: str) -> tuple[Amount, ...]:
        """Per-option amounts a full withdrawal of the position would release."""
        pool = self.pool(market)
        position = self.ledger.get_position(market, provider)
        if position is None or position.is_empty or pool.total_liquidity.is_zero():
            return tuple(Amount.ZERO for _ in pool.option_reserves)
        return tuple(
            reserve.mul_ratio(position.shares.atto, pool.total_liquidity.atto)
            for reserve in pool.option_reserves
        )

    def summary(self, market: str) -> PoolSummary:
        pool = self.pool(market)
        try:
            probabilities = implied_probabilities(pool.option_reserves)
        except InvalidSwap:
            # Drained pool: no meaningful prices
            probabilities = []
        providers = [p for p in self.ledger.positions_for(market) if not p.is_empty]
        return PoolSummary(
            market=pool.market,
            num_options=pool.num_options,
            reserves=pool.reserves_in_tokens(),
            probabilities=probabilities,
            total_liquidity=pool.total_liquidity.to_tokens(),
            fee_collected=pool.fee_collected.to_tokens(),
            total_volume=pool.total_volume.to_tokens(),
            n_providers=len(providers),
        )

    def summaries(self) -> list[PoolSummary]:
        return [self.summary(pool.market) for pool in self.ledger.list_pools()]
