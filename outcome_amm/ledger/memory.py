"""In-memory ledger."""

import threading
from typing import Optional

from outcome_amm.core.amount import Amount
from outcome_amm.core.pool import LiquidityPool, LPPosition
from outcome_amm.ledger.base import Ledger, LedgerStats


class InMemoryLedger(Ledger):
    """Ledger backed by plain dicts; records are immutable so no copies are needed."""

    def __init__(self) -> None:
        self._pools: dict[str, LiquidityPool] = {}
        self._positions: dict[tuple[str, str], LPPosition] = {}
        self._stats = LedgerStats()
        self._lock = threading.Lock()

    def get_pool(self, market: str) -> Optional[LiquidityPool]:
        return self._pools.get(market)

    def get_position(self, market: str, provider: str) -> Optional[LPPosition]:
        return self._positions.get((market, provider))

    def positions_for(self, market: str) -> list[LPPosition]:
        return [
            position for (pool_market, _), position in self._positions.items()
            if pool_market == market
        ]

    def list_pools(self) -> list[LiquidityPool]:
        return list(self._pools.values())

    def stats(self) -> LedgerStats:
        return self._stats

    def commit(
        self,
        pool: LiquidityPool,
        position: Optional[LPPosition] = None,
        pools_delta: int = 0,
        volume_delta: Amount = Amount.ZERO,
    ) -> None:
        with self._lock:
            self._pools[pool.market] = pool
            if position is not None:
                self._positions[(position.market, position.provider)] = position
            self._stats = self._stats.bumped(pools_delta, volume_delta)
