"""Read-only query tests."""

from decimal import Decimal

import pytest

from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import InvalidSwap, PoolNotFound
from outcome_amm.engine.queries import PoolQueries
from tests.fixtures.pool_fixtures import CREATOR, tokens


@pytest.fixture
def queries(binary_engine) -> PoolQueries:
    return PoolQueries(binary_engine.ledger)


class TestPoolLookups:

    def test_missing_pool(self, queries):
        with pytest.raises(PoolNotFound):
            queries.pool("nowhere")

    def test_position(self, queries):
        assert queries.position("market", CREATOR).shares == tokens(1000)
        assert queries.position("market", "stranger") is None


class TestPrices:

    def test_balanced_binary_pool(self, queries):
        assert queries.implied_probabilities("market") == [Decimal("0.5"), Decimal("0.5")]
        assert queries.spot_price("market", 0, 1) == Decimal(1)

    def test_buying_an_option_raises_its_probability(self, binary_engine, queries):
        binary_engine.swap("market", 0, 1, tokens(100))
        p0, p1 = queries.implied_probabilities("market")
        assert p1 > p0
        assert queries.spot_price("market", 0, 1) < 1

    def test_spot_price_out_of_range(self, queries):
        with pytest.raises(InvalidSwap):
            queries.spot_price("market", 0, 2)


class TestPositionValue:

    def test_full_position(self, queries):
        assert queries.position_value("market", CREATOR) == (tokens(500), tokens(500))

    def test_partial_position(self, binary_engine, queries):
        binary_engine.add_liquidity("market", "alice", tokens(250))
        assert queries.position_value("market", "alice") == (tokens(125), tokens(125))

    def test_no_position(self, queries):
        assert queries.position_value("market", "stranger") == (Amount.ZERO, Amount.ZERO)


class TestSummary:

    def test_summary_fields(self, binary_engine, queries):
        binary_engine.add_liquidity("market", "alice", tokens(100))
        summary = queries.summary("market")

        assert summary.num_options == 2
        assert summary.reserves == [Decimal(550), Decimal(550)]
        assert summary.total_liquidity == Decimal(1100)
        assert summary.n_providers == 2

    def test_drained_pool_has_no_probabilities(self, binary_engine, queries):
        binary_engine.remove_liquidity("market", CREATOR, tokens(1000))
        summary = queries.summary("market")
        assert summary.probabilities == []
        assert summary.n_providers == 0

    def test_summaries_cover_every_pool(self, binary_engine, queries):
        binary_engine.create_pool("second", 4, tokens(40), CREATOR)
        assert [s.market for s in queries.summaries()] == ["market", "second"]
