"""
Storage layer for the expense categorizer.

SQLite persistence for categorized transactions.
"""

from .sqlite_store import (
    TransactionStore,
    open_conn,
    CREATE_TRANSACTIONS,
)

__all__ = [
    "TransactionStore",
    "open_conn",
    "CREATE_TRANSACTIONS",
]
