# pipeline/scan.py
"""
Receipt scan: (image|txt) --OCR--> text --parse--> amount/date/merchant --> category

The merchant line is categorized with the rule-based classifier, the same
call the expense form makes while the user types.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Union

from categorizer.corpus import DEFAULT_CATEGORY
from categorizer.service import CategorizerService
from parser.receipt import parse_receipt_text
from spend_core.models import ScannedExpense

log = logging.getLogger("pipeline.scan")

TXT_EXTS = {".txt"}


def read_receipt_text(path: Path, reader: Optional[Any] = None) -> str:
    """.txt is read as-is; anything else goes through OCR."""
    if path.suffix.lower() in TXT_EXTS:
        return path.read_text(encoding="utf-8", errors="ignore")
    if reader is None:
        from ocr.reader import Reader

        reader = Reader()
    log.info("OCR: %s", path)
    return reader.read_text(path)


def scan_receipt(
    path: Union[str, Path],
    service: CategorizerService,
    reader: Optional[Any] = None,
) -> ScannedExpense:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")

    scan = parse_receipt_text(read_receipt_text(path, reader))
    category = (
        service.predict_category(scan.merchant) if scan.merchant else DEFAULT_CATEGORY
    )
    log.info(
        "Scanned %s: merchant=%r amount=%s date=%s -> %s",
        path.name,
        scan.merchant,
        scan.amount,
        scan.date,
        category,
    )
    return ScannedExpense(scan=scan, category=category, source_path=str(path))
