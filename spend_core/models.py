from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class TrainingExample:
    text: str
    category: str


class PredictionSource(str, Enum):
    RULES = "rules"
    MODEL = "model"


@dataclass
class Prediction:
    category: str
    source: PredictionSource = PredictionSource.RULES
    # softmax probability of the winning class; None on the rule path
    confidence: Optional[float] = None


@dataclass(frozen=True)
class CorrectionRecord:
    description: str
    category: str


@dataclass
class ReceiptScan:
    text: str
    amount: Optional[str] = None
    date: Optional[str] = None  # ISO yyyy-mm-dd
    merchant: Optional[str] = None


@dataclass
class ScannedExpense:
    scan: ReceiptScan
    category: str
    source_path: Optional[str] = None


@dataclass
class Transaction:
    description: str
    amount: float
    category: str
    transaction_date: Optional[str] = None
    id: Optional[int] = None
