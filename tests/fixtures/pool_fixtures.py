"""Pool test fixtures.

Provides utilities to build engines and pools with standard shapes, and
to snapshot pool state for before/after comparisons.

Standard pool profiles:
- Binary: 2 options, 1000 liquidity (500 / 500)
- Ternary: 3 options, 900 liquidity (300 / 300 / 300)
- Wide: 8 options, 8000 liquidity (1000 each)
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
import itertools
from typing import Callable, Optional

from outcome_amm.config import PoolParameters
from outcome_amm.core.amount import Amount
from outcome_amm.core.pool import LiquidityPool
from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.ledger.base import Ledger
from outcome_amm.ledger.memory import InMemoryLedger

CREATOR = "creator"


class PoolProfile(Enum):
    """Standard pool shapes for testing."""
    BINARY = "binary"
    TERNARY = "ternary"
    WIDE = "wide"


_PROFILES = {
    PoolProfile.BINARY: (2, "1000"),
    PoolProfile.TERNARY: (3, "900"),
    PoolProfile.WIDE: (8, "8000"),
}


def tokens(value) -> Amount:
    """Shorthand for ``Amount.from_tokens``."""
    return Amount.from_tokens(Decimal(str(value)))


def counting_clock() -> Callable[[], int]:
    """Deterministic clock: 0, 1, 2, ..."""
    counter = itertools.count()
    return lambda: next(counter)


def create_engine(
    fee_rate: Decimal = Decimal("0.003"),
    min_liquidity: Amount = Amount.from_tokens(1),
    ledger: Optional[Ledger] = None,
) -> PoolEngine:
    """Engine over an in-memory ledger with a deterministic clock."""
    return PoolEngine(
        ledger if ledger is not None else InMemoryLedger(),
        PoolParameters(fee_rate=fee_rate, min_liquidity=min_liquidity),
        clock=counting_clock(),
    )


def create_pool(
    engine: PoolEngine,
    market: str = "market",
    profile: PoolProfile = PoolProfile.BINARY,
) -> LiquidityPool:
    """Register a pool of a standard profile, owned by ``CREATOR``."""
    n_options, liquidity = _PROFILES[profile]
    return engine.create_pool(market, n_options, tokens(liquidity), CREATOR)


@dataclass(frozen=True)
class PoolSnapshot:
    """Immutable view of a pool's state at a point in time."""
    reserves: tuple[Amount, ...]
    k_constant: int
    total_liquidity: Amount
    fee_collected: Amount
    total_volume: Amount

    @property
    def reserve_product(self) -> int:
        result = 1
        for reserve in self.reserves:
            result *= reserve.atto
        return result


def snapshot_pool(engine: PoolEngine, market: str = "market") -> PoolSnapshot:
    pool = engine.ledger.get_pool(market)
    return PoolSnapshot(
        reserves=pool.option_reserves,
        k_constant=pool.k_constant,
        total_liquidity=pool.total_liquidity,
        fee_collected=pool.fee_collected,
        total_volume=pool.total_volume,
    )
