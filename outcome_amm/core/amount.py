"""Fixed-point token amounts."""

from dataclasses import dataclass
from decimal import ROUND_DOWN, Decimal, localcontext
from typing import Union

ATTO_PER_TOKEN = 10**18
MAX_ATTO = 2**128 - 1
# Enough digits for any atto value and its token rendering
PRECISION = 60

TokenValue = Union[Decimal, str, int]


@dataclass(frozen=True, order=True)
class Amount:
    """Non-negative token quantity counted in atto-units (1e-18 token).

    All arithmetic saturates: additions clamp at ``MAX`` and subtractions
    clamp at zero, so no reserve or balance can wrap or go negative.
    """
    atto: int

    def __post_init__(self) -> None:
        if not isinstance(self.atto, int) or isinstance(self.atto, bool):
            raise TypeError(f"atto must be an int, got {type(self.atto).__name__}")
        if self.atto < 0:
            raise ValueError(f"Amount must be >= 0, got {self.atto} atto")
        if self.atto > MAX_ATTO:
            raise ValueError(f"Amount exceeds maximum, got {self.atto} atto")

    @classmethod
    def from_tokens(cls, value: TokenValue) -> "Amount":
        """Build an amount from a token value (``Decimal("1.5")``, ``"1.5"``, ``2``).

        Digits below atto precision are truncated. Floats are rejected since
        they cannot carry an exact token value.
        """
        if isinstance(value, float):
            raise TypeError("Amounts cannot be built from float; use Decimal or str")
        tokens = Decimal(value)
        if not tokens.is_finite():
            raise ValueError(f"Amount must be finite, got {value}")
        with localcontext() as ctx:
            ctx.prec = PRECISION
            atto = tokens.scaleb(18).to_integral_value(rounding=ROUND_DOWN)
        return cls(int(atto))

    @classmethod
    def from_atto(cls, atto: int) -> "Amount":
        """Build an amount from atto-units, clamping into the valid range."""
        return cls(min(max(atto, 0), MAX_ATTO))

    def to_tokens(self) -> Decimal:
        """The amount as an exact Decimal token value."""
        with localcontext() as ctx:
            ctx.prec = PRECISION
            return Decimal(self.atto).scaleb(-18)

    def is_zero(self) -> bool:
        return self.atto == 0

    def saturating_add(self, other: "Amount") -> "Amount":
        return Amount(min(self.atto + other.atto, MAX_ATTO))

    def saturating_sub(self, other: "Amount") -> "Amount":
        return Amount(max(self.atto - other.atto, 0))

    def mul_ratio(self, numerator: int, denominator: int) -> "Amount":
        """Scale by ``numerator / denominator``, rounding down."""
        if denominator <= 0:
            raise ZeroDivisionError("ratio denominator must be positive")
        return Amount.from_atto(self.atto * numerator // denominator)

    def __str__(self) -> str:
        with localcontext() as ctx:
            ctx.prec = PRECISION
            return f"{self.to_tokens().normalize():f}"


Amount.ZERO = Amount(0)
Amount.MAX = Amount(MAX_ATTO)


def total(amounts) -> Amount:
    """Saturating sum of a sequence of amounts."""
    result = Amount.ZERO
    for amount in amounts:
        result = result.saturating_add(amount)
    return result


def product(amounts) -> int:
    """Exact product of amounts in atto-units."""
    result = 1
    for amount in amounts:
        result *= amount.atto
    return result
