"""SQLite-backed ledger."""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Optional

from outcome_amm.core.amount import Amount
from outcome_amm.core.pool import LiquidityPool, LPPosition
from outcome_amm.ledger.base import Ledger, LedgerStats

logger = logging.getLogger(__name__)


def _pool_from_row(row: sqlite3.Row) -> LiquidityPool:
    return LiquidityPool(
        market=row["market"],
        option_reserves=tuple(Amount(int(atto)) for atto in json.loads(row["option_reserves"])),
        total_liquidity=Amount(int(row["total_liquidity"])),
        k_constant=int(row["k_constant"]),
        fee_collected=Amount(int(row["fee_collected"])),
        total_volume=Amount(int(row["total_volume"])),
        created_at=row["created_at"],
    )


def _stats_from_row(row: sqlite3.Row) -> LedgerStats:
    return LedgerStats(
        total_pools=row["total_pools"],
        total_volume=Amount(int(row["total_volume"])),
    )


def _position_from_row(row: sqlite3.Row) -> LPPosition:
    return LPPosition(
        market=row["market"],
        provider=row["provider"],
        shares=Amount(int(row["shares"])),
        deposited_at=row["deposited_at"],
        initial_k=int(row["initial_k"]),
    )


class SQLiteLedger(Ledger):
    """Manages pools and LP positions in a SQLite database.

    Amounts and invariants exceed 64-bit integers, so they are stored as
    decimal TEXT in atto-units and parsed back exactly.
    """

    def __init__(self, db_path: str = "data/pools.db"):
        self.db_path = db_path
        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
            self._shared = None
        else:
            # Each connect() to ":memory:" would open a fresh database
            self._shared = sqlite3.connect(db_path)
            self._shared.row_factory = sqlite3.Row
        self.init_db()

    def _connect(self) -> sqlite3.Connection:
        if self._shared is not None:
            return self._shared
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _release(self, conn: sqlite3.Connection) -> None:
        if conn is not self._shared:
            conn.close()

    def init_db(self) -> None:
        """Create tables if they don't exist."""
        conn = self._connect()
        try:
            with conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS pools (
                        id INTEGER PRIMARY KEY AUTOINCREMENT,
                        market TEXT NOT NULL UNIQUE,
                        option_reserves TEXT NOT NULL,
                        total_liquidity TEXT NOT NULL,
                        k_constant TEXT NOT NULL,
                        fee_collected TEXT NOT NULL,
                        total_volume TEXT NOT NULL,
                        created_at INTEGER NOT NULL
                    )
                """)
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS lp_positions (
                        market TEXT NOT NULL,
                        provider TEXT NOT NULL,
                        shares TEXT NOT NULL,
                        deposited_at INTEGER NOT NULL,
                        initial_k TEXT NOT NULL,
                        PRIMARY KEY (market, provider),
                        FOREIGN KEY (market) REFERENCES pools(market)
                    )
                """)
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS ledger_stats (
                        id INTEGER PRIMARY KEY CHECK(id = 1),
                        total_pools INTEGER NOT NULL,
                        total_volume TEXT NOT NULL
                    )
                """)
                conn.execute("""
                    INSERT OR IGNORE INTO ledger_stats (id, total_pools, total_volume)
                    VALUES (1, 0, '0')
                """)
        finally:
            self._release(conn)

    def get_pool(self, market: str) -> Optional[LiquidityPool]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM pools WHERE market = ?", (market,)).fetchone()
        finally:
            self._release(conn)
        return _pool_from_row(row) if row else None

    def get_position(self, market: str, provider: str) -> Optional[LPPosition]:
        conn = self._connect()
        try:
            row = conn.execute(
                "SELECT * FROM lp_positions WHERE market = ? AND provider = ?",
                (market, provider),
            ).fetchone()
        finally:
            self._release(conn)
        return _position_from_row(row) if row else None

    def positions_for(self, market: str) -> list[LPPosition]:
        conn = self._connect()
        try:
            rows = conn.execute(
                "SELECT * FROM lp_positions WHERE market = ? ORDER BY provider",
                (market,),
            ).fetchall()
        finally:
            self._release(conn)
        return [_position_from_row(row) for row in rows]

    def list_pools(self) -> list[LiquidityPool]:
        conn = self._connect()
        try:
            rows = conn.execute("SELECT * FROM pools ORDER BY id").fetchall()
        finally:
            self._release(conn)
        return [_pool_from_row(row) for row in rows]

    def stats(self) -> LedgerStats:
        conn = self._connect()
        try:
            row = conn.execute("SELECT * FROM ledger_stats WHERE id = 1").fetchone()
        finally:
            self._release(conn)
        return _stats_from_row(row)

    def commit(
        self,
        pool: LiquidityPool,
        position: Optional[LPPosition] = None,
        pools_delta: int = 0,
        volume_delta: Amount = Amount.ZERO,
    ) -> None:
        conn = self._connect()
        try:
            # Connection context manager commits or rolls back the transaction
            with conn:
                # Take the write lock before reading the totals
                conn.execute("BEGIN IMMEDIATE")
                conn.execute("""
                    INSERT INTO pools (market, option_reserves, total_liquidity, k_constant,
                                       fee_collected, total_volume, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    ON CONFLICT(market) DO UPDATE SET
                        option_reserves = excluded.option_reserves,
                        total_liquidity = excluded.total_liquidity,
                        k_constant = excluded.k_constant,
                        fee_collected = excluded.fee_collected,
                        total_volume = excluded.total_volume
                """, (
                    pool.market,
                    json.dumps([str(reserve.atto) for reserve in pool.option_reserves]),
                    str(pool.total_liquidity.atto),
                    str(pool.k_constant),
                    str(pool.fee_collected.atto),
                    str(pool.total_volume.atto),
                    pool.created_at,
                ))
                if position is not None:
                    conn.execute("""
                        INSERT OR REPLACE INTO lp_positions
                            (market, provider, shares, deposited_at, initial_k)
                        VALUES (?, ?, ?, ?, ?)
                    """, (
                        position.market,
                        position.provider,
                        str(position.shares.atto),
                        position.deposited_at,
                        str(position.initial_k),
                    ))
                if pools_delta or not volume_delta.is_zero():
                    row = conn.execute("SELECT * FROM ledger_stats WHERE id = 1").fetchone()
                    stats = _stats_from_row(row).bumped(pools_delta, volume_delta)
                    conn.execute(
                        "UPDATE ledger_stats SET total_pools = ?, total_volume = ? WHERE id = 1",
                        (stats.total_pools, str(stats.total_volume.atto)),
                    )
        finally:
            self._release(conn)
        logger.debug("Committed pool %s", pool.market)

    def close(self) -> None:
        """Close the shared connection of an in-memory database."""
        if self._shared is not None:
            self._shared.close()
            self._shared = None
