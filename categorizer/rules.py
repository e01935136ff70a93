# categorizer/rules.py
"""
Rule-based categorization over the keyword corpus.

Each description token is checked, in token order, against every corpus blob
in declared order; the first blob that contains the token as a substring wins.
Substring (not whole-word) containment is intentional: "pizz" matches
"pizza", and short tokens can land inside unrelated longer words.
"""
from __future__ import annotations

from typing import Iterable, Optional, Tuple

from spend_core.models import TrainingExample
from categorizer.corpus import DEFAULT_CATEGORY, TRAINING_DATA
from categorizer.features import tokenize


def match_rule(
    description: Optional[str],
    corpus: Iterable[TrainingExample] = TRAINING_DATA,
) -> Optional[Tuple[str, TrainingExample]]:
    """Return (matched token, corpus entry) for the first hit, else None."""
    examples = tuple(corpus)
    for token in tokenize(description):
        for example in examples:
            if token in example.text:
                return token, example
    return None


def predict_category(
    description: Optional[str],
    corpus: Iterable[TrainingExample] = TRAINING_DATA,
) -> str:
    """First-match category for ``description``; "Other" when nothing matches."""
    hit = match_rule(description, corpus)
    if hit is None:
        return DEFAULT_CATEGORY
    return hit[1].category
