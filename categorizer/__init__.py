"""
Expense auto-categorization.

Rule-based keyword matching plus a small trainable text classifier over a
bag-of-words presence encoding, both driven by the same labelled corpus.
"""

from .corpus import CATEGORIES, DEFAULT_CATEGORY, TRAINING_DATA
from .service import (
    CategorizerService,
    ModelState,
    get_default_service,
    predict_category,
    predict_category_with_model,
    record_user_correction,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_CATEGORY",
    "TRAINING_DATA",
    "CategorizerService",
    "ModelState",
    "get_default_service",
    "predict_category",
    "predict_category_with_model",
    "record_user_correction",
]
