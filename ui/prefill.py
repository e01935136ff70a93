# ui/prefill.py
"""Receipt prefill for the expense form, applied once per uploaded file."""
from __future__ import annotations

from datetime import date
from typing import Any, MutableMapping, Optional

from parser.receipt import parse_receipt_text
from spend_core.models import ReceiptScan

PREFILL_KEY = "prefilled_upload"


def prefill_from_receipt(
    state: MutableMapping[str, Any], upload_id: Any, text: str
) -> Optional[ReceiptScan]:
    """
    Parse receipt text into the form's widget state.

    Returns the scan the first time ``upload_id`` is seen and None on later
    reruns for the same upload, so user edits to the fields are kept.
    """
    if state.get(PREFILL_KEY) == upload_id:
        return None
    state[PREFILL_KEY] = upload_id

    scan = parse_receipt_text(text)
    if scan.merchant:
        state["description"] = scan.merchant
    if scan.amount:
        state["amount"] = float(scan.amount)
    if scan.date:
        state["txn_date"] = date.fromisoformat(scan.date)
    return scan
