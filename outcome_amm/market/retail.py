"""Retail trader simulation with Poisson arrivals."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

import numpy as np


@dataclass
class SwapOrder:
    """A retail order to swap one option into another."""
    from_option: int
    to_option: int
    size: Decimal  # Gross input, in units of from_option


class RetailTrader:
    """Generates uninformed retail swap flow over a pool's options.

    Traders arrive according to a Poisson process, pick a random ordered
    pair of distinct options and submit a lognormally sized order.
    """

    def __init__(
        self,
        n_options: int,
        arrival_rate: float = 1.0,
        mean_size: float = 1.0,
        size_sigma: float = 1.2,
        seed: Optional[int] = None,
    ):
        """
        Args:
            n_options: Number of options in the target pool
            arrival_rate: Expected number of orders per time step (lambda)
            mean_size: Mean order size (in input-option units)
            size_sigma: Lognormal sigma (log-space)
            seed: Random seed for reproducibility
        """
        if n_options < 2:
            raise ValueError(f"n_options must be >= 2, got {n_options}")
        self.n_options = n_options
        self.arrival_rate = arrival_rate
        self.mean_size = mean_size
        self.size_sigma = size_sigma
        self._rng = np.random.default_rng(seed)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reset the random state."""
        if seed is not None:
            self._rng = np.random.default_rng(seed)

    def generate_orders(self) -> list[SwapOrder]:
        """Generate retail orders for one time step.

        Returns:
            List of swap orders (may be empty if no arrivals)
        """
        n_arrivals = self._rng.poisson(self.arrival_rate)

        orders = []
        for _ in range(n_arrivals):
            # Lognormally distributed sizes with mean = mean_size
            sigma = max(self.size_sigma, 0.01)
            mean = max(self.mean_size, 0.01)
            mu = float(np.log(mean) - 0.5 * sigma * sigma)
            size = Decimal(str(round(float(self._rng.lognormal(mu, sigma)), 12)))

            from_option, to_option = self._rng.choice(self.n_options, size=2, replace=False)
            orders.append(SwapOrder(
                from_option=int(from_option),
                to_option=int(to_option),
                size=size,
            ))

        return orders
