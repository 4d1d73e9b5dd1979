"""Ledger interface for pools and LP positions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from outcome_amm.core.amount import Amount
from outcome_amm.core.pool import LiquidityPool, LPPosition


@dataclass(frozen=True)
class LedgerStats:
    """Engine-wide totals across every pool."""
    total_pools: int = 0
    total_volume: Amount = Amount.ZERO

    def bumped(self, pools_delta: int = 0, volume_delta: Amount = Amount.ZERO) -> "LedgerStats":
        return LedgerStats(
            total_pools=self.total_pools + pools_delta,
            total_volume=self.total_volume.saturating_add(volume_delta),
        )


class Ledger(ABC):
    """Storage for pool records, LP positions and engine-wide totals.

    ``commit`` is the only write path. It stores the pool and the position
    and bumps the totals together or not at all, so an operation never
    leaves a pool and its positions out of step. Totals are passed as
    deltas and applied inside the write, so operations on different pools
    can commit concurrently without losing updates.
    """

    @abstractmethod
    def get_pool(self, market: str) -> Optional[LiquidityPool]:
        """Return the pool for ``market``, or None if unregistered."""

    @abstractmethod
    def get_position(self, market: str, provider: str) -> Optional[LPPosition]:
        """Return a provider's position in ``market``, or None."""

    @abstractmethod
    def positions_for(self, market: str) -> list[LPPosition]:
        """All positions recorded against ``market``."""

    @abstractmethod
    def list_pools(self) -> list[LiquidityPool]:
        """All registered pools, in creation order."""

    @abstractmethod
    def stats(self) -> LedgerStats:
        """Current engine-wide totals."""

    @abstractmethod
    def commit(
        self,
        pool: LiquidityPool,
        position: Optional[LPPosition] = None,
        pools_delta: int = 0,
        volume_delta: Amount = Amount.ZERO,
    ) -> None:
        """Atomically store a pool, optionally a position, and bump the totals."""

    def total_shares(self, market: str) -> Amount:
        """Sum of LP shares recorded against ``market``."""
        result = Amount.ZERO
        for position in self.positions_for(market):
            result = result.saturating_add(position.shares)
        return result
