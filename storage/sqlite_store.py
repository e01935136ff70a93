# storage/sqlite_store.py
"""
SQLite storage for categorized expense transactions.

Provides:
- single and batch inserts (expense form / bulk import)
- the {id, category} update used when a user corrects a category
- listing and per-category spending totals
"""
from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from categorizer.corpus import is_category
from spend_core.models import Transaction

CREATE_TRANSACTIONS = """
CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    description TEXT NOT NULL,
    amount REAL NOT NULL,
    category TEXT NOT NULL,
    transaction_date TEXT,
    created_at TEXT NOT NULL,
    updated_at TEXT
);
"""


def open_conn(path: Union[str, Path] = "data/expenses.sqlite") -> sqlite3.Connection:
    """Open a database connection with row factory."""
    if str(path) != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    return conn


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def _check_category(category: str) -> None:
    if not is_category(category):
        raise ValueError(f"Unknown category: {category!r}")


class TransactionStore:
    """Typed CRUD over the transactions table."""

    def __init__(self, db_path: Union[str, Path] = "data/expenses.sqlite"):
        self.db_path = str(db_path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = open_conn(self.db_path)
            self.ensure_schema()
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def ensure_schema(self) -> None:
        cur = self.conn.cursor()
        cur.execute(CREATE_TRANSACTIONS)
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_transactions_category ON transactions(category)"
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_transactions_date ON transactions(transaction_date)"
        )
        self.conn.commit()

    # =========================================================================
    # Inserts
    # =========================================================================

    def add_transaction(
        self,
        description: str,
        amount: float,
        category: str,
        transaction_date: Optional[str] = None,
    ) -> int:
        """Insert one transaction. Returns its ID."""
        _check_category(category)
        cur = self.conn.cursor()
        cur.execute(
            """
            INSERT INTO transactions (description, amount, category, transaction_date, created_at)
            VALUES (?, ?, ?, ?, ?)
            """,
            (description, float(amount), category, transaction_date, _now()),
        )
        self.conn.commit()
        return int(cur.lastrowid)

    def insert_many(self, transactions: Iterable[Transaction]) -> List[int]:
        """Insert a batch in one commit; nothing is written if any row is invalid."""
        txns = list(transactions)
        for t in txns:
            _check_category(t.category)

        ids: List[int] = []
        created = _now()
        cur = self.conn.cursor()
        try:
            for t in txns:
                cur.execute(
                    """
                    INSERT INTO transactions (description, amount, category, transaction_date, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (t.description, float(t.amount), t.category, t.transaction_date, created),
                )
                ids.append(int(cur.lastrowid))
                t.id = ids[-1]
            self.conn.commit()
        except sqlite3.Error:
            self.conn.rollback()
            raise
        return ids

    # =========================================================================
    # Updates / reads
    # =========================================================================

    def update_category(self, txn_id: int, category: str) -> bool:
        """Set a transaction's category. Returns True if a row was updated."""
        _check_category(category)
        cur = self.conn.cursor()
        cur.execute(
            "UPDATE transactions SET category = ?, updated_at = ? WHERE id = ?",
            (category, _now(), txn_id),
        )
        self.conn.commit()
        return cur.rowcount > 0

    def get_transaction(self, txn_id: int) -> Optional[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute("SELECT * FROM transactions WHERE id = ?", (txn_id,))
        row = cur.fetchone()
        return dict(row) if row else None

    def list_transactions(
        self, limit: int = 100, category: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """Newest first, optionally filtered by category."""
        where = "WHERE category = ?" if category else ""
        params: List[Any] = [category] if category else []
        cur = self.conn.cursor()
        cur.execute(
            f"""
            SELECT * FROM transactions
            {where}
            ORDER BY transaction_date IS NULL, transaction_date DESC, id DESC
            LIMIT ?
            """,
            params + [limit],
        )
        return [dict(row) for row in cur.fetchall()]

    def spending_by_category(self) -> List[Dict[str, Any]]:
        cur = self.conn.cursor()
        cur.execute(
            """
            SELECT category, COUNT(*) AS count, SUM(amount) AS total
            FROM transactions
            GROUP BY category
            ORDER BY total DESC
            """
        )
        return [dict(row) for row in cur.fetchall()]
