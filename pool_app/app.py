"""Outcome AMM - Streamlit dashboard over the pool ledger."""

from decimal import Decimal, InvalidOperation

import streamlit as st

from outcome_amm.config import load_parameters, resolve_db_path
from outcome_amm.core.amount import Amount
from outcome_amm.core.errors import AMMError
from outcome_amm.engine.pool_engine import PoolEngine
from outcome_amm.engine.queries import PoolQueries
from outcome_amm.ledger.sqlite import SQLiteLedger
from outcome_amm.logging_setup import configure_logging
from outcome_amm.market.retail import RetailTrader
from outcome_amm.market.simulation import run_simulation
from pool_app.stats import PoolStats, simulation_frame
from pool_app.visualizations import (
    create_probability_chart,
    create_reserves_chart,
    create_share_chart,
    create_trajectory_chart,
)

# Page config
st.set_page_config(
    page_title="Outcome AMM",
    page_icon="📈",
    layout="wide",
    initial_sidebar_state="expanded"
)

# Initialize session state
if 'engine' not in st.session_state:
    configure_logging("INFO")
    ledger = SQLiteLedger(resolve_db_path())
    st.session_state.engine = PoolEngine(ledger, load_parameters())
    st.session_state.queries = PoolQueries(ledger)
    st.session_state.stats = PoolStats(st.session_state.queries)

engine = st.session_state.engine
queries = st.session_state.queries
stats = st.session_state.stats


def parse_amount(raw: str):
    try:
        return Amount.from_tokens(Decimal(raw))
    except (InvalidOperation, ValueError):
        st.error(f"Invalid amount: {raw}")
        return None


st.sidebar.title("📈 Outcome AMM")
page = st.sidebar.selectbox("Navigation", ["🏠 Pools", "🔁 Trade", "💧 Liquidity", "🎲 Simulate"])

pools = engine.ledger.list_pools()
markets = [pool.market for pool in pools]

# ============================================================================
# POOLS PAGE
# ============================================================================

if page == "🏠 Pools":
    st.title("🏠 Pools")

    ledger_stats = engine.ledger.stats()
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Pools", ledger_stats.total_pools)
    with col2:
        st.metric("Total Volume", f"{float(ledger_stats.total_volume.to_tokens()):,.2f}")
    with col3:
        st.metric("Fee Rate", f"{engine.params.fee_rate * 10000:.0f} bps")

    if not markets:
        st.info("No pools yet. Create the first one below.")
    else:
        st.dataframe(stats.pools_frame(), use_container_width=True)

        market = st.selectbox("Pool", markets)
        options = stats.options_frame(market)
        col1, col2 = st.columns(2)
        with col1:
            st.plotly_chart(create_reserves_chart(options, market), use_container_width=True)
        with col2:
            if options['probability'].notna().all():
                st.plotly_chart(create_probability_chart(options, market), use_container_width=True)

    st.subheader("Create Pool")
    new_market = st.text_input("Market identifier")
    n_options = st.number_input("Options", min_value=2, max_value=255, value=2)
    liquidity = st.text_input("Initial liquidity", value="1000")
    provider = st.text_input("Provider", key="create_provider")
    if st.button("Create"):
        amount = parse_amount(liquidity)
        if amount is not None:
            try:
                engine.create_pool(new_market, int(n_options), amount, provider)
                st.success(f"Created pool {new_market}")
                st.rerun()
            except AMMError as e:
                st.error(str(e))

# ============================================================================
# TRADE PAGE
# ============================================================================

elif page == "🔁 Trade":
    st.title("🔁 Trade")
    if not markets:
        st.info("No pools yet.")
    else:
        market = st.selectbox("Pool", markets)
        pool = queries.pool(market)
        col1, col2 = st.columns(2)
        with col1:
            from_option = st.selectbox("Pay option", list(range(pool.num_options)))
        with col2:
            to_option = st.selectbox("Receive option", list(range(pool.num_options)), index=1)
        raw_amount = st.text_input("Amount in", value="10")
        raw_min_out = st.text_input("Minimum out", value="0")

        amount = parse_amount(raw_amount)
        if amount is not None:
            try:
                quote = engine.get_quote(market, from_option, amount, True, to_option)
                st.write(f"Quote: **{quote.amount_out}** of option {to_option} (fee {quote.fee})")
            except AMMError as e:
                st.warning(str(e))

        if st.button("Swap"):
            min_out = parse_amount(raw_min_out)
            if amount is not None and min_out is not None:
                try:
                    out = engine.swap(market, from_option, to_option, amount, min_out)
                    st.success(f"Received {out} of option {to_option}")
                except AMMError as e:
                    st.error(str(e))

# ============================================================================
# LIQUIDITY PAGE
# ============================================================================

elif page == "💧 Liquidity":
    st.title("💧 Liquidity")
    if not markets:
        st.info("No pools yet.")
    else:
        market = st.selectbox("Pool", markets)
        positions = stats.positions_frame(market)
        st.dataframe(positions, use_container_width=True)
        if not positions.empty and (positions['shares'] > 0).any():
            st.plotly_chart(create_share_chart(positions, market), use_container_width=True)

        provider = st.text_input("Provider", key="liquidity_provider")
        raw_amount = st.text_input("Amount / shares", value="100")
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Add Liquidity"):
                amount = parse_amount(raw_amount)
                if amount is not None:
                    try:
                        shares = engine.add_liquidity(market, provider, amount)
                        st.success(f"Minted {shares} shares")
                    except AMMError as e:
                        st.error(str(e))
        with col2:
            if st.button("Remove Liquidity"):
                shares = parse_amount(raw_amount)
                if shares is not None:
                    try:
                        withdrawal = engine.remove_liquidity(market, provider, shares)
                        released = ", ".join(str(a) for a in withdrawal.amounts)
                        st.success(f"Released [{released}]")
                    except AMMError as e:
                        st.error(str(e))

# ============================================================================
# SIMULATE PAGE
# ============================================================================

elif page == "🎲 Simulate":
    st.title("🎲 Simulate Retail Flow")
    if not markets:
        st.info("No pools yet.")
    else:
        market = st.selectbox("Pool", markets)
        n_steps = st.slider("Steps", min_value=10, max_value=1000, value=100)
        arrival_rate = st.slider("Orders per step", min_value=0.1, max_value=5.0, value=1.0)
        mean_size = st.number_input("Mean order size", min_value=0.01, value=10.0)
        seed = st.number_input("Seed", min_value=0, value=0)

        if st.button("Run"):
            trader = RetailTrader(
                n_options=queries.pool(market).num_options,
                arrival_rate=arrival_rate,
                mean_size=mean_size,
                seed=int(seed),
            )
            with st.spinner("Simulating..."):
                result = run_simulation(engine, market, trader, n_steps)
            st.success(f"Executed {result.n_executed} of {result.n_orders} orders")
            trajectory = simulation_frame(result)
            st.plotly_chart(create_trajectory_chart(trajectory, market), use_container_width=True)
