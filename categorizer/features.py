# categorizer/features.py
from __future__ import annotations

import re
from typing import Iterable, List, Optional

import numpy as np

from categorizer.vocabulary import Vocabulary

_SPLIT_RX = re.compile(r"\W+")


def tokenize(text: Optional[str]) -> List[str]:
    """Lower-case and split on runs of non-word characters; no empty tokens."""
    return [t for t in _SPLIT_RX.split((text or "").lower()) if t]


def encode(text: Optional[str], vocabulary: Vocabulary) -> np.ndarray:
    """
    Presence vector over the vocabulary (length = vocabulary size + 1).
    Slot 0 belongs to unknown tokens and is never set.
    """
    vocabulary.require_built()
    features = np.zeros(vocabulary.feature_length, dtype=np.float32)
    for token in tokenize(text):
        index = vocabulary.word_index(token)
        if index > 0:
            features[index] = 1.0
    return features


def encode_batch(texts: Iterable[str], vocabulary: Vocabulary) -> np.ndarray:
    rows = [encode(t, vocabulary) for t in texts]
    if not rows:
        return np.zeros((0, vocabulary.feature_length), dtype=np.float32)
    return np.stack(rows)
