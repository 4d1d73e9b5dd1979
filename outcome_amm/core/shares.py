"""Proportional LP share accounting."""

from dataclasses import dataclass

from outcome_amm.core.amount import MAX_ATTO, Amount
from outcome_amm.core.errors import InsufficientLiquidity, InvalidSwap
from outcome_amm.core.pool import LiquidityPool


@dataclass(frozen=True)
class Deposit:
    """Outcome of adding liquidity: minted shares and scaled reserves."""
    shares: Amount
    reserves: tuple[Amount, ...]


@dataclass(frozen=True)
class Burn:
    """Outcome of burning shares: released amounts and shrunk reserves."""
    released: tuple[Amount, ...]
    reserves: tuple[Amount, ...]


def seed_reserves(amount: Amount, num_options: int) -> tuple[Amount, ...]:
    """Split ``amount`` evenly across options.

    The division remainder goes to option 0 so the reserves sum to exactly
    ``amount``.
    """
    per_option, remainder = divmod(amount.atto, num_options)
    reserves = [Amount(per_option)] * num_options
    reserves[0] = Amount(per_option + remainder)
    return tuple(reserves)


def _credit(reserves, additions) -> tuple[Amount, ...]:
    credited = []
    for index, (reserve, add) in enumerate(zip(reserves, additions)):
        if reserve.atto + add.atto > MAX_ATTO:
            raise InvalidSwap(f"deposit would overflow reserve of option {index}")
        credited.append(Amount(reserve.atto + add.atto))
    return tuple(credited)


def mint(pool: LiquidityPool, amount: Amount) -> Deposit:
    """Mint shares for a deposit, pro-rata to the existing share supply.

    The pool is valued at the sum of its reserves V. A deposit of A scales
    every reserve by A / V and mints ``total_liquidity * A / V`` shares, so
    the depositor's fraction of the supply equals their fraction of the
    reserves. Before any drift V equals the share supply and shares == A.

    A deposit that would push any reserve or the share supply past
    ``MAX_ATTO`` is rejected rather than clamped.
    """
    if amount.is_zero():
        raise InsufficientLiquidity("deposit must be positive")

    supply = pool.total_liquidity.atto
    if supply == 0:
        seeded = seed_reserves(amount, pool.num_options)
        return Deposit(shares=amount, reserves=_credit(pool.option_reserves, seeded))

    value = sum(reserve.atto for reserve in pool.option_reserves)
    if value == 0:
        raise InvalidSwap("pool has shares outstanding but no reserves")

    minted = supply * amount.atto // value
    if minted == 0:
        raise InsufficientLiquidity("deposit too small to mint any shares")
    if supply + minted > MAX_ATTO:
        raise InvalidSwap("deposit would overflow the share supply")
    shares = Amount(minted)
    additions = [reserve.mul_ratio(amount.atto, value) for reserve in pool.option_reserves]
    return Deposit(shares=shares, reserves=_credit(pool.option_reserves, additions))


def burn(pool: LiquidityPool, shares: Amount) -> Burn:
    """Release ``shares / total_liquidity`` of every reserve.

    Released amounts round down; the dust stays in the pool.
    """
    supply = pool.total_liquidity.atto
    if shares.is_zero():
        raise InsufficientLiquidity("shares to burn must be positive")
    if shares.atto > supply:
        raise InsufficientLiquidity("cannot burn more than the share supply")

    released = tuple(
        reserve.mul_ratio(shares.atto, supply) for reserve in pool.option_reserves
    )
    reserves = tuple(
        reserve.saturating_sub(out)
        for reserve, out in zip(pool.option_reserves, released)
    )
    return Burn(released=released, reserves=reserves)
