"""Pool engine: the mutating pool operations and read-only quotes."""

from dataclasses import replace
import functools
import logging
import time
from typing import Callable, Optional

from outcome_amm.config import PoolParameters
from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import (
    AMMError,
    InsufficientLiquidity,
    InvalidSwap,
    MinLiquidityNotMet,
    PoolAlreadyExists,
    PoolNotFound,
    SlippageTooHigh,
)
from outcome_amm.core.events import (
    LiquidityAdded,
    LiquidityRemoved,
    Outbox,
    PoolCreated,
    SwapExecuted,
)
from outcome_amm.core.fees import FeeSplit, accrue
from outcome_amm.core.pool import (
    MAX_OPTIONS,
    MIN_OPTIONS,
    LiquidityPool,
    LPPosition,
    Withdrawal,
)
from outcome_amm.core.pricing import SwapQuote, quote_swap
from outcome_amm.core.shares import burn, mint, seed_reserves
from outcome_amm.ledger.base import Ledger

logger = logging.getLogger(__name__)


def _micros() -> int:
    return time.time_ns() // 1000


def _log_rejections(operation: Callable) -> Callable:
    @functools.wraps(operation)
    def wrapper(self, market, *args, **kwargs):
        try:
            return operation(self, market, *args, **kwargs)
        except AMMError as exc:
            logger.debug("%s rejected for %s: %s", operation.__name__, market, exc)
            raise
    return wrapper


class PoolEngine:
    """Entry point for every pool operation.

    Each operation loads records from the ledger, computes the complete new
    state, commits it in one ledger write, and only then emits a
    notification. Anything that fails raises before the commit, so the
    ledger never sees a partial update.

    Operations on one pool must be serialised by the caller; the engine
    holds no locks.
    """

    def __init__(
        self,
        ledger: Ledger,
        params: Optional[PoolParameters] = None,
        outbox: Optional[Outbox] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.ledger = ledger
        self.params = params if params is not None else PoolParameters()
        self.outbox = outbox if outbox is not None else Outbox()
        self.clock = clock if clock is not None else _micros

    def _load_pool(self, market: str) -> LiquidityPool:
        pool = self.ledger.get_pool(market)
        if pool is None:
            raise PoolNotFound(market)
        return pool

    @_log_rejections
    def create_pool(
        self,
        market: str,
        num_options: int,
        initial_liquidity: Amount,
        provider: str,
    ) -> LiquidityPool:
        """Register a pool with ``initial_liquidity`` split evenly across options.

        The creator receives shares equal to the initial liquidity.

        Raises:
            InvalidSwap: ``num_options`` outside [2, 255]
            InsufficientLiquidity: zero initial liquidity
            MinLiquidityNotMet: initial liquidity below the configured floor
            PoolAlreadyExists: ``market`` is already registered
        """
        if not MIN_OPTIONS <= num_options <= MAX_OPTIONS:
            raise InvalidSwap(
                f"pool needs {MIN_OPTIONS}-{MAX_OPTIONS} options, got {num_options}"
            )
        if initial_liquidity.is_zero():
            raise InsufficientLiquidity("initial liquidity must be positive")
        if initial_liquidity < self.params.min_liquidity:
            raise MinLiquidityNotMet(
                f"{initial_liquidity} < minimum {self.params.min_liquidity}"
            )
        if self.ledger.get_pool(market) is not None:
            raise PoolAlreadyExists(market)

        now = self.clock()
        reserves = seed_reserves(initial_liquidity, num_options)
        pool = LiquidityPool(
            market=market,
            option_reserves=reserves,
            total_liquidity=initial_liquidity,
            k_constant=0,
            created_at=now,
        ).with_reserves(reserves)
        position = LPPosition(
            market=market,
            provider=provider,
            shares=initial_liquidity,
            deposited_at=now,
            initial_k=pool.k_constant,
        )
        self.ledger.commit(pool, position, pools_delta=1)
        logger.info(
            "Created pool %s: %d options, liquidity %s", market, num_options, initial_liquidity
        )

        self.outbox.emit(PoolCreated(market=market, liquidity=initial_liquidity))
        return pool

    @_log_rejections
    def add_liquidity(self, market: str, provider: str, amount: Amount) -> Amount:
        """Deposit ``amount`` into a pool and mint shares pro-rata.

        Returns:
            Shares minted to ``provider``

        Raises:
            PoolNotFound: ``market`` is not registered
            InsufficientLiquidity: zero deposit, or too small to mint a share
            InvalidSwap: deposit would overflow a reserve or the share supply
        """
        pool = self._load_pool(market)
        deposit = mint(pool, amount)

        updated = pool.with_reserves(
            deposit.reserves,
            total_liquidity=pool.total_liquidity.saturating_add(deposit.shares),
        )
        existing = self.ledger.get_position(market, provider)
        held = existing.shares if existing is not None else Amount.ZERO
        position = LPPosition(
            market=market,
            provider=provider,
            shares=held.saturating_add(deposit.shares),
            deposited_at=self.clock(),
            initial_k=updated.k_constant,
        )
        self.ledger.commit(updated, position)
        logger.info(
            "Added liquidity to %s: %s from %s for %s shares",
            market, amount, provider, deposit.shares,
        )

        self.outbox.emit(LiquidityAdded(
            market=market,
            provider=provider,
            amount=amount,
            shares=deposit.shares,
        ))
        return deposit.shares

    @_log_rejections
    def remove_liquidity(self, market: str, provider: str, shares: Amount) -> Withdrawal:
        """Burn ``shares`` and release the matching fraction of every reserve.

        Raises:
            PoolNotFound: ``market`` is not registered
            InsufficientLiquidity: zero shares, or more than ``provider`` holds
        """
        pool = self._load_pool(market)
        position = self.ledger.get_position(market, provider)
        if shares.is_zero():
            raise InsufficientLiquidity("shares to burn must be positive")
        if position is None or position.shares < shares:
            held = position.shares if position is not None else Amount.ZERO
            raise InsufficientLiquidity(f"{provider} holds {held} shares, requested {shares}")

        burned = burn(pool, shares)
        updated = pool.with_reserves(
            burned.reserves,
            total_liquidity=pool.total_liquidity.saturating_sub(shares),
        )
        self.ledger.commit(
            updated,
            replace(position, shares=position.shares.saturating_sub(shares)),
        )
        logger.info("Removed %s shares of %s from %s", shares, market, provider)

        self.outbox.emit(LiquidityRemoved(
            market=market,
            provider=provider,
            shares=shares,
            amounts=burned.released,
        ))
        return Withdrawal(
            market=market,
            provider=provider,
            shares=shares,
            amounts=burned.released,
        )

    @_log_rejections
    def swap(
        self,
        market: str,
        from_option: int,
        to_option: int,
        amount: Amount,
        min_amount_out: Amount = Amount.ZERO,
    ) -> Amount:
        """Swap ``amount`` of ``from_option`` into ``to_option``.

        The stored ``k_constant`` is left as is; it is the invariant every
        subsequent swap prices against.

        Returns:
            Amount of ``to_option`` paid out

        Raises:
            PoolNotFound: ``market`` is not registered
            InvalidSwap: bad indices, zero amount, reserve overflow or exhaustion
            SlippageTooHigh: output below ``min_amount_out``
        """
        pool = self._load_pool(market)
        quote = quote_swap(
            pool.option_reserves,
            pool.k_constant,
            from_option,
            to_option,
            amount,
            self.params.fee_rate,
        )
        if quote.amount_out < min_amount_out:
            raise SlippageTooHigh(f"output {quote.amount_out} < minimum {min_amount_out}")

        split = FeeSplit(gross=amount, fee=quote.fee, net=quote.amount_after_fee)
        updated = accrue(replace(pool, option_reserves=quote.new_reserves), split)
        self.ledger.commit(updated, volume_delta=amount)
        logger.info(
            "Swap on %s: %s of option %d -> %s of option %d (fee %s)",
            market, amount, from_option, quote.amount_out, to_option, quote.fee,
        )

        self.outbox.emit(SwapExecuted(
            market=market,
            from_option=from_option,
            to_option=to_option,
            amount_in=amount,
            amount_out=quote.amount_out,
        ))
        return quote.amount_out

    @_log_rejections
    def get_quote(
        self,
        market: str,
        option_index: int,
        amount: Amount,
        is_buy: bool,
        counter_option: Optional[int] = None,
    ) -> SwapQuote:
        """Quote a swap without touching any state.

        Side is from the pool's perspective:
        - is_buy=True: pool buys ``option_index`` (trader pays ``amount`` of
          it and receives ``counter_option``)
        - is_buy=False: pool sells ``option_index`` (trader pays ``amount``
          of ``counter_option`` and receives ``option_index``)

        ``counter_option`` defaults to the other option of a two-option
        pool and is required otherwise.

        Raises:
            PoolNotFound: ``market`` is not registered
            InvalidSwap: missing counter option, or any swap rejection
        """
        pool = self._load_pool(market)
        if not pool.has_option(option_index):
            raise InvalidSwap(f"option {option_index} out of range for {pool.num_options} options")
        if counter_option is None:
            if pool.num_options != 2:
                raise InvalidSwap("counter option is required for pools with more than two options")
            counter_option = 1 - option_index

        if is_buy:
            from_option, to_option = option_index, counter_option
        else:
            from_option, to_option = counter_option, option_index
        return quote_swap(
            pool.option_reserves,
            pool.k_constant,
            from_option,
            to_option,
            amount,
            self.params.fee_rate,
        )
