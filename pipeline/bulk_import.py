# pipeline/bulk_import.py
"""
Bulk import of bank-style transactions.

Input CSV columns: ``name`` (merchant/description), ``amount`` and an
optional ``date``. Each row is categorized with the rule-based classifier and
mapped to the stored shape {description, amount, category, transaction_date}.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from categorizer.service import CategorizerService
from spend_core.models import Transaction
from spend_utils.normalizers import normalize_amount

log = logging.getLogger("pipeline.bulk_import")

REQUIRED_COLUMNS = {"name", "amount"}


@dataclass
class ImportResult:
    transactions: List[Transaction] = field(default_factory=list)
    skipped: int = 0
    ids: List[int] = field(default_factory=list)


def load_transactions_csv(path: Union[str, Path]) -> pd.DataFrame:
    df = pd.read_csv(path)
    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise ValueError(
            f"Transactions CSV must contain columns: {', '.join(sorted(missing))}"
        )
    return df


def _amount(value) -> Optional[float]:
    if value is None or pd.isna(value):
        return None
    if pd.api.types.is_number(value):
        return float(value)
    amt = normalize_amount(str(value))
    return amt.value if amt else None


def categorize_frame(df: pd.DataFrame, service: CategorizerService) -> ImportResult:
    result = ImportResult()
    for row in df.itertuples(index=False):
        name = getattr(row, "name", None)
        name = "" if name is None or pd.isna(name) else str(name).strip()
        amount = _amount(getattr(row, "amount", None))
        if not name or amount is None:
            result.skipped += 1
            continue

        raw_date = getattr(row, "date", None)
        txn_date = None if raw_date is None or pd.isna(raw_date) else str(raw_date)
        result.transactions.append(
            Transaction(
                description=name,
                amount=amount,
                category=service.predict_category(name),
                transaction_date=txn_date,
            )
        )
    if result.skipped:
        log.warning("Skipped %d row(s) without a name or amount", result.skipped)
    return result


def import_csv(
    path: Union[str, Path],
    service: CategorizerService,
    store=None,
) -> ImportResult:
    """Categorize every row; write them in one batch when a store is given."""
    result = categorize_frame(load_transactions_csv(path), service)
    if store is not None and result.transactions:
        result.ids = store.insert_many(result.transactions)
        log.info("Saved %d transaction(s)", len(result.ids))
    return result
