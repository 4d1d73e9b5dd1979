"""Pool and LP position ledgers."""

from outcome_amm.ledger.base import Ledger, LedgerStats
from outcome_amm.ledger.memory import InMemoryLedger
from outcome_amm.ledger.sqlite import SQLiteLedger

__all__ = [
    "Ledger",
    "LedgerStats",
    "InMemoryLedger",
    "SQLiteLedger",
]
