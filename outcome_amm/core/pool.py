"""Pool and liquidity-position records."""

from dataclasses import dataclass, replace
from decimal import Decimal

from outcome_amm.core.amount import Amount, product, total

MIN_OPTIONS = 2
MAX_OPTIONS = 255


@dataclass(frozen=True)
class LiquidityPool:
    """Reserve set and accounting state of one multi-outcome market.

    Records are immutable; operations build a new record and hand it to the
    ledger in a single commit.
    - ``k_constant`` is the exact product of the reserves in atto-units as of
      the last liquidity event; swaps price against it without changing it.
    - ``total_liquidity`` is the LP share supply.
    - Fees live in ``fee_collected`` and are never part of the reserves.
    """
    market: str
    option_reserves: tuple[Amount, ...]
    total_liquidity: Amount
    k_constant: int
    fee_collected: Amount = Amount.ZERO
    total_volume: Amount = Amount.ZERO
    created_at: int = 0

    @property
    def num_options(self) -> int:
        return len(self.option_reserves)

    @property
    def reserve_value(self) -> Amount:
        """Sum of all option reserves."""
        return total(self.option_reserves)

    @property
    def reserve_product(self) -> int:
        """Product of the current reserves (differs from k only by rounding)."""
        return product(self.option_reserves)

    def has_option(self, index: int) -> bool:
        return 0 <= index < self.num_options

    def with_reserves(self, reserves: tuple[Amount, ...], **changes) -> "LiquidityPool":
        """Copy with new reserves and a recomputed ``k_constant``."""
        return replace(
            self,
            option_reserves=tuple(reserves),
            k_constant=product(reserves),
            **changes,
        )

    def reserves_in_tokens(self) -> list[Decimal]:
        return [reserve.to_tokens() for reserve in self.option_reserves]


@dataclass(frozen=True)
class LPPosition:
    """A provider's claim on one pool.

    ``initial_k`` snapshots the pool invariant at the last deposit for
    impermanent-loss analysis; the pool's own accounting ignores it.
    """
    market: str
    provider: str
    shares: Amount
    deposited_at: int
    initial_k: int

    @property
    def is_empty(self) -> bool:
        return self.shares.is_zero()


@dataclass(frozen=True)
class Withdrawal:
    """Per-option amounts released by burning LP shares."""
    market: str
    provider: str
    shares: Amount
    amounts: tuple[Amount, ...]
