"""Fee-on-input accounting.

Fees are withheld from the swap input before pricing:
- Only ``amount - fee`` enters the reserves: (r_i + γ·Δ) · r_j' · Π r_m = k
- The fee accumulates in ``fee_collected``, NOT in reserves
- ``total_volume`` counts the gross input, fee included
Redistributing collected fees to LPs belongs to a settlement layer outside
this package.
"""

from dataclasses import dataclass, replace
from decimal import Decimal

from outcome_amm.core.amount import Amount
from outcome_amm.core.pool import LiquidityPool


def validate_fee_rate(fee_rate: Decimal) -> None:
    if not isinstance(fee_rate, Decimal):
        raise TypeError(f"fee_rate must be a Decimal, got {type(fee_rate).__name__}")
    if not fee_rate.is_finite() or fee_rate < 0 or fee_rate >= 1:
        raise ValueError(f"fee_rate must be in [0, 1), got {fee_rate}")


@dataclass(frozen=True)
class FeeSplit:
    """Gross swap input split into the withheld fee and the priced remainder."""
    gross: Amount
    fee: Amount
    net: Amount


def split_fee(amount: Amount, fee_rate: Decimal) -> FeeSplit:
    """Withhold ``floor(amount * fee_rate)`` from a swap input."""
    validate_fee_rate(fee_rate)
    numerator, denominator = fee_rate.as_integer_ratio()
    fee = amount.mul_ratio(numerator, denominator)
    return FeeSplit(gross=amount, fee=fee, net=amount.saturating_sub(fee))


def accrue(pool: LiquidityPool, split: FeeSplit) -> LiquidityPool:
    """Record a swap's fee and gross volume on the pool."""
    return replace(
        pool,
        fee_collected=pool.fee_collected.saturating_add(split.fee),
        total_volume=pool.total_volume.saturating_add(split.gross),
    )
