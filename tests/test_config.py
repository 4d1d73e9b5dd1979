"""Pool parameter and environment configuration tests."""

from decimal import Decimal

import pytest

from outcome_amm.config import (
    DEFAULT_DB_PATH,
    PoolParameters,
    load_parameters,
    resolve_db_path,
)
from outcome_amm.core.amount import Amount


class TestPoolParameters:

    def test_defaults(self):
        params = PoolParameters()
        assert params.fee_rate == Decimal("0.003")
        assert params.min_liquidity == Amount.from_tokens(1)

    def test_rejects_fee_of_one(self):
        with pytest.raises(ValueError):
            PoolParameters(fee_rate=Decimal("1"))

    def test_rejects_float_fee(self):
        with pytest.raises(TypeError):
            PoolParameters(fee_rate=0.003)

    def test_rejects_raw_min_liquidity(self):
        with pytest.raises(TypeError):
            PoolParameters(min_liquidity=100)


class TestEnvironment:

    def test_defaults_without_environment(self, monkeypatch):
        monkeypatch.delenv("AMM_FEE_RATE", raising=False)
        monkeypatch.delenv("AMM_MIN_LIQUIDITY", raising=False)
        assert load_parameters() == PoolParameters()

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("AMM_FEE_RATE", "0.01")
        monkeypatch.setenv("AMM_MIN_LIQUIDITY", "250.5")
        params = load_parameters()
        assert params.fee_rate == Decimal("0.01")
        assert params.min_liquidity == Amount.from_tokens("250.5")

    def test_malformed_fee(self, monkeypatch):
        monkeypatch.setenv("AMM_FEE_RATE", "thirty bps")
        with pytest.raises(ValueError, match="AMM_FEE_RATE"):
            load_parameters()

    def test_out_of_range_fee(self, monkeypatch):
        monkeypatch.setenv("AMM_FEE_RATE", "1.5")
        with pytest.raises(ValueError):
            load_parameters()

    def test_db_path(self, monkeypatch):
        monkeypatch.delenv("AMM_DB_PATH", raising=False)
        assert resolve_db_path() == DEFAULT_DB_PATH
        monkeypatch.setenv("AMM_DB_PATH", "/tmp/other.db")
        assert resolve_db_path() == "/tmp/other.db"
