"""Pool parameters and environment overrides."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
import os

from outcome_amm.core.amount import Amount
from outcome_amm.core.fees import validate_fee_rate

DEFAULT_FEE_RATE = Decimal("0.003")
DEFAULT_MIN_LIQUIDITY = Amount.from_tokens(1)
DEFAULT_DB_PATH = "data/pools.db"


@dataclass(frozen=True)
class PoolParameters:
    """Engine-wide pool parameters.

    Fees are expressed as decimals (e.g., 0.003 = 30bps).
    """
    fee_rate: Decimal = DEFAULT_FEE_RATE
    min_liquidity: Amount = field(default=DEFAULT_MIN_LIQUIDITY)

    def __post_init__(self) -> None:
        validate_fee_rate(self.fee_rate)
        if not isinstance(self.min_liquidity, Amount):
            raise TypeError("min_liquidity must be an Amount")


def _decimal_from_env(name: str, default: str) -> Decimal:
    raw = os.environ.get(name, default)
    try:
        return Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} must be a decimal number, got {raw!r}") from None


def load_parameters() -> PoolParameters:
    """Resolve pool parameters from environment or defaults."""
    fee_rate = _decimal_from_env("AMM_FEE_RATE", str(DEFAULT_FEE_RATE))
    min_liquidity = _decimal_from_env("AMM_MIN_LIQUIDITY", str(DEFAULT_MIN_LIQUIDITY))
    return PoolParameters(
        fee_rate=fee_rate,
        min_liquidity=Amount.from_tokens(min_liquidity),
    )


def resolve_db_path() -> str:
    """Resolve the ledger database path from environment or default."""
    return os.environ.get("AMM_DB_PATH", DEFAULT_DB_PATH)
