"""Constant-product pricing across N option reserves."""

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Sequence

from outcome_amm.core.amount import MAX_ATTO, PRECISION, Amount, product
from outcome_amm.core.errors import InvalidSwap
from outcome_amm.core.fees import split_fee


@dataclass(frozen=True)
class SwapQuote:
    """Priced swap of one option into another.

    ``new_reserves`` is the full post-trade reserve vector; only the
    ``from_option`` and ``to_option`` entries differ from the input.
    """
    from_option: int
    to_option: int
    amount_in: Amount          # Gross input, fee included
    fee: Amount                # Withheld, never enters reserves
    amount_after_fee: Amount
    amount_out: Amount
    new_reserves: tuple[Amount, ...]

    @property
    def effective_price(self) -> Decimal:
        """Input paid per unit of output, fee included."""
        if self.amount_out.is_zero():
            return Decimal("0")
        with localcontext() as ctx:
            ctx.prec = PRECISION
            return self.amount_in.to_tokens() / self.amount_out.to_tokens()


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def quote_swap(
    reserves: Sequence[Amount],
    k_constant: int,
    from_option: int,
    to_option: int,
    amount_in: Amount,
    fee_rate: Decimal,
) -> SwapQuote:
    """Price a swap of ``amount_in`` of ``from_option`` into ``to_option``.

    Pure function: the same inputs always give the same quote and nothing
    is mutated. Committed swaps and read-only quotes both go through here.

    Uses fee-on-input with γ = 1 - fee_rate. Solving the invariant for the
    destination reserve:
        new_i = r_i + γ·Δ
        new_j = k / (new_i · Π r_m for m ∉ {i, j})
        out   = r_j - new_j

    new_j is rounded up, so the trader absorbs the rounding and the product
    of the new reserves never falls below k.

    Args:
        reserves: Current option reserves
        k_constant: Stored invariant (exact atto product)
        from_option: Index of the option the trader pays in
        to_option: Index of the option the trader receives
        amount_in: Gross input amount
        fee_rate: Fraction of the input withheld as fee, in [0, 1)

    Returns:
        SwapQuote with the output amount and post-trade reserves

    Raises:
        InvalidSwap: identical or out-of-range indices, zero input, a
            degenerate pool, an input that would overflow its reserve, or an
            output that would exhaust the reserve
    """
    n_options = len(reserves)
    if from_option == to_option:
        raise InvalidSwap(f"cannot swap option {from_option} into itself")
    for index in (from_option, to_option):
        if not 0 <= index < n_options:
            raise InvalidSwap(f"option {index} out of range for {n_options} options")
    if amount_in.is_zero():
        raise InvalidSwap("swap amount must be positive")
    if k_constant <= 0:
        raise InvalidSwap("pool has an empty reserve")

    split = split_fee(amount_in, fee_rate)

    untouched = product(
        reserve for index, reserve in enumerate(reserves)
        if index not in (from_option, to_option)
    )
    if untouched == 0:
        raise InvalidSwap("pool has an empty reserve")

    from_reserve = reserves[from_option]
    to_reserve = reserves[to_option]
    if from_reserve.atto + split.net.atto > MAX_ATTO:
        raise InvalidSwap(f"swap would overflow reserve of option {from_option}")
    new_from = Amount(from_reserve.atto + split.net.atto)
    new_to_atto = _ceil_div(k_constant, new_from.atto * untouched)
    amount_out_atto = to_reserve.atto - new_to_atto

    if amount_out_atto <= 0:
        raise InvalidSwap("swap too small to produce any output")
    if amount_out_atto >= to_reserve.atto:
        raise InvalidSwap(f"swap would exhaust reserve of option {to_option}")

    new_reserves = list(reserves)
    new_reserves[from_option] = new_from
    new_reserves[to_option] = Amount(new_to_atto)

    return SwapQuote(
        from_option=from_option,
        to_option=to_option,
        amount_in=amount_in,
        fee=split.fee,
        amount_after_fee=split.net,
        amount_out=Amount(amount_out_atto),
        new_reserves=tuple(new_reserves),
    )


def implied_probabilities(reserves: Sequence[Amount]) -> list[Decimal]:
    """Marginal price of each option, normalised to sum to one.

    Under a product invariant the marginal price of option i is proportional
    to 1 / r_i: the scarcer an option's reserve, the more it costs.
    """
    if any(reserve.is_zero() for reserve in reserves):
        raise InvalidSwap("pool has an empty reserve")
    with localcontext() as ctx:
        ctx.prec = PRECISION
        inverses = [1 / reserve.to_tokens() for reserve in reserves]
        denominator = sum(inverses)
        return [inverse / denominator for inverse in inverses]
