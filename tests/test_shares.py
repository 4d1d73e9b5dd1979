"""Share accounting tests for minting and burning LP shares."""

import pytest

from outcome_amm.core.amount import MAX_ATTO, Amount, product
from outcome_amm.core.errors import InsufficientLiquidity, InvalidSwap
from outcome_amm.core.pool import LiquidityPool
from outcome_amm.core.shares import burn, mint, seed_reserves
from tests.fixtures.pool_fixtures import tokens


def make_pool(reserves, total_liquidity) -> LiquidityPool:
    reserves = tuple(tokens(r) for r in reserves)
    return LiquidityPool(
        market="m",
        option_reserves=reserves,
        total_liquidity=tokens(total_liquidity),
        k_constant=product(reserves),
    )


class TestSeedReserves:

    def test_even_split(self):
        assert seed_reserves(tokens(1000), 2) == (tokens(500), tokens(500))

    def test_remainder_to_option_zero(self):
        reserves = seed_reserves(Amount(10), 3)
        assert reserves == (Amount(4), Amount(3), Amount(3))

    def test_sum_is_exact(self):
        amount = tokens(1000)
        reserves = seed_reserves(amount, 7)
        assert sum(r.atto for r in reserves) == amount.atto


class TestMint:

    def test_undrifted_pool_mints_deposit(self):
        deposit = mint(make_pool([500, 500], 1000), tokens(100))
        assert deposit.shares == tokens(100)
        assert deposit.reserves == (tokens(550), tokens(550))

    def test_drifted_pool_mints_pro_rata_to_value(self):
        """Reserves worth 1200 backing 1000 shares: 120 deposit earns 100 shares."""
        deposit = mint(make_pool([400, 800], 1000), tokens(120))
        assert deposit.shares == tokens(100)
        assert deposit.reserves == (tokens(440), tokens(880))

    def test_deposit_preserves_composition(self):
        deposit = mint(make_pool([300, 200, 100], 600), tokens(60))
        assert deposit.reserves == (tokens(330), tokens(220), tokens(110))

    def test_emptied_pool_is_reseeded(self):
        deposit = mint(make_pool([0, 0, 0], 0), tokens(90))
        assert deposit.shares == tokens(90)
        assert deposit.reserves == (tokens(30), tokens(30), tokens(30))

    def test_zero_deposit(self):
        with pytest.raises(InsufficientLiquidity):
            mint(make_pool([500, 500], 1000), Amount.ZERO)

    def test_shares_without_reserves(self):
        with pytest.raises(InvalidSwap):
            mint(make_pool([0, 0], 10), tokens(5))

    def test_deposit_too_small_for_a_share(self):
        with pytest.raises(InsufficientLiquidity):
            mint(make_pool([10**9, 10**9], 1), Amount(1))

    def test_deposit_overflowing_reserve(self):
        reserves = (Amount(MAX_ATTO - 100), Amount(100))
        pool = LiquidityPool(
            market="m",
            option_reserves=reserves,
            total_liquidity=Amount(MAX_ATTO // 2),
            k_constant=product(reserves),
        )
        with pytest.raises(InvalidSwap):
            mint(pool, tokens(1))

    def test_deposit_overflowing_share_supply(self):
        reserves = (tokens(1), tokens(1))
        pool = LiquidityPool(
            market="m",
            option_reserves=reserves,
            total_liquidity=Amount(MAX_ATTO - 10),
            k_constant=product(reserves),
        )
        with pytest.raises(InvalidSwap):
            mint(pool, tokens(1))

    def test_reseed_up_to_max(self):
        pool = LiquidityPool(
            market="m",
            option_reserves=(Amount(MAX_ATTO - 2), Amount.ZERO),
            total_liquidity=Amount.ZERO,
            k_constant=0,
        )
        assert mint(pool, Amount(4)).reserves == (Amount.MAX, Amount(2))
        with pytest.raises(InvalidSwap):
            mint(pool, Amount(6))


class TestBurn:

    def test_proportional_release(self):
        result = burn(make_pool([600, 300], 900), tokens(300))
        assert result.released == (tokens(200), tokens(100))
        assert result.reserves == (tokens(400), tokens(200))

    def test_full_burn_empties_pool(self):
        result = burn(make_pool([600, 300], 900), tokens(900))
        assert result.reserves == (Amount.ZERO, Amount.ZERO)

    def test_release_rounds_down(self):
        pool = LiquidityPool(
            market="m",
            option_reserves=(Amount(10), Amount(10)),
            total_liquidity=Amount(3),
            k_constant=100,
        )
        result = burn(pool, Amount(1))
        assert result.released == (Amount(3), Amount(3))
        assert result.reserves == (Amount(7), Amount(7))

    def test_zero_shares(self):
        with pytest.raises(InsufficientLiquidity):
            burn(make_pool([500, 500], 1000), Amount.ZERO)

    def test_more_than_supply(self):
        with pytest.raises(InsufficientLiquidity):
            burn(make_pool([500, 500], 1000), tokens(1001))

    def test_mint_then_burn_round_trip(self):
        pool = make_pool([437, 571], 1000)
        deposit = mint(pool, tokens(250))
        grown = LiquidityPool(
            market="m",
            option_reserves=deposit.reserves,
            total_liquidity=pool.total_liquidity.saturating_add(deposit.shares),
            k_constant=product(deposit.reserves),
        )
        result = burn(grown, deposit.shares)
        for restored, original in zip(result.reserves, pool.option_reserves):
            assert abs(restored.atto - original.atto) <= 2
