# spend_utils/normalizers.py
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from typing import Optional


# ---------------- Amount normalization ----------------

CURRENCY_MAP = {
    "$": "USD",
    "US$": "USD",
    "USD": "USD",
    "€": "EUR",
    "EUR": "EUR",
    "₹": "INR",
    "INR": "INR",
}

CUR_RX = re.compile(
    r"^\s*(?P<cur>US\$|USD|EUR|INR|[$€₹])\s*(?P<num>.*)$", re.IGNORECASE
)

NUM_RX = re.compile(
    r"""
    ^\s*
    (?P<sign>[-(]?)\s*
    (?P<int>\d{1,3}(?:,\d{3})*|\d+)
    (?P<dec>\.\d{1,2})?
    \s*\)?\s*$
    """,
    re.VERBOSE,
)


@dataclass
class Amount:
    raw: str
    value: Optional[float]
    currency: Optional[str]


def normalize_amount(raw: Optional[str]) -> Optional[Amount]:
    """Parse "$1,234.50", "(3.25)", "-3.25", "EUR 9.99" style amounts."""
    if raw is None:
        return None

    s = str(raw).strip()
    if not s:
        return Amount(raw="", value=None, currency=None)

    cur = None
    num_part = s
    mcur = CUR_RX.match(s)
    if mcur:
        cur = CURRENCY_MAP.get(mcur.group("cur").upper())
        num_part = mcur.group("num").strip()

    m = NUM_RX.match(num_part)
    if not m:
        return Amount(raw=s, value=None, currency=cur)

    num_str = (m.group("int") or "").replace(",", "") + (m.group("dec") or "")
    sign = "-" if m.group("sign") in ("-", "(") else ""
    return Amount(raw=s, value=float(sign + num_str), currency=cur)


# ---------------- Dates ----------------

MDY_SEARCH_RX = re.compile(r"(\d{1,2})[/-](\d{1,2})[/-](\d{2,4})")


def mdy_to_iso(month: str, day: str, year: str) -> Optional[str]:
    """Month/day/year parts to ISO; two-digit years are 20YY. None if invalid."""
    y = int(year)
    if len(year) == 2:
        y += 2000
    try:
        return date(y, int(month), int(day)).isoformat()
    except ValueError:
        return None


def find_iso_date(text: Optional[str]) -> Optional[str]:
    """First M/D/Y (or M-D-Y) date in free text, as ISO yyyy-mm-dd."""
    m = MDY_SEARCH_RX.search(text or "")
    if not m:
        return None
    return mdy_to_iso(m.group(1), m.group(2), m.group(3))
