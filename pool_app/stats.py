"""Tabular pool and position statistics."""

from typing import List

import pandas as pd

from outcome_amm.engine.queries import PoolQueries
from outcome_amm.market.simulation import SimulationResult


class PoolStats:
    """Builds pandas tables from the ledger for display."""

    def __init__(self, queries: PoolQueries):
        self.queries = queries

    def pools_frame(self) -> pd.DataFrame:
        """One row per pool."""
        rows = [
            {
                'market': s.market,
                'options': s.num_options,
                'liquidity': float(s.total_liquidity),
                'volume': float(s.total_volume),
                'fees': float(s.fee_collected),
                'providers': s.n_providers,
            }
            for s in self.queries.summaries()
        ]
        return pd.DataFrame(rows, columns=['market', 'options', 'liquidity', 'volume', 'fees', 'providers'])

    def options_frame(self, market: str) -> pd.DataFrame:
        """One row per option of ``market`` with reserve and implied probability."""
        summary = self.queries.summary(market)
        probabilities = summary.probabilities or [None] * summary.num_options
        return pd.DataFrame({
            'option': list(range(summary.num_options)),
            'reserve': [float(r) for r in summary.reserves],
            'probability': [float(p) if p is not None else None for p in probabilities],
        })

    def positions_frame(self, market: str) -> pd.DataFrame:
        """One row per provider with shares and share of the pool."""
        pool = self.queries.pool(market)
        supply = pool.total_liquidity.to_tokens()
        rows = []
        for position in self.queries.ledger.positions_for(market):
            shares = position.shares.to_tokens()
            rows.append({
                'provider': position.provider,
                'shares': float(shares),
                'pool_share': float(shares / supply) if supply else 0.0,
            })
        return pd.DataFrame(rows, columns=['provider', 'shares', 'pool_share'])


def simulation_frame(result: SimulationResult) -> pd.DataFrame:
    """Flatten a simulation trajectory: one row per step, one column per reserve."""
    rows: List[dict] = []
    for step in result.steps:
        row = {
            'step': step.timestamp,
            'volume': float(step.total_volume),
            'fees': float(step.fee_collected),
        }
        for index, reserve in enumerate(step.reserves):
            row[f'reserve_{index}'] = float(reserve)
        rows.append(row)
    return pd.DataFrame(rows)
