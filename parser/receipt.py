# parser/receipt.py
from __future__ import annotations

import re
from typing import Optional

from spend_core.models import ReceiptScan
from spend_utils.normalizers import find_iso_date

AMOUNT_RX = re.compile(r"\$?(\d+\.\d{2})")


def _first_line(text: str) -> Optional[str]:
    # merchant name is usually the first printed line
    for raw in text.splitlines():
        s = raw.strip()
        if s:
            return s
    return None


def parse_receipt_text(text: Optional[str]) -> ReceiptScan:
    """
    Pull amount, date and merchant out of OCR text:
      - amount: first money-looking number (``12.34`` / ``$12.34``), without "$"
      - date:   first M/D/Y or M-D-Y date, as ISO yyyy-mm-dd
      - merchant: first non-blank line
    """
    text = text or ""
    m = AMOUNT_RX.search(text)
    return ReceiptScan(
        text=text,
        amount=m.group(1) if m else None,
        date=find_iso_date(text),
        merchant=_first_line(text),
    )
