# categorizer/vocabulary.py
"""
Word and category indices derived from the static corpus.

Both indices are built once and are read-only afterwards: a trained model is
only meaningful against the exact indices it was trained with, so ``build()``
never re-indexes.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Sequence

from spend_core.models import TrainingExample
from categorizer.corpus import CATEGORIES, TRAINING_DATA

log = logging.getLogger("categorizer.vocabulary")


class VocabularyNotBuiltError(RuntimeError):
    """Raised when features are requested before ``Vocabulary.build()``."""


class Vocabulary:
    """word -> index (0 = unknown) and category <-> dense id."""

    def __init__(
        self,
        corpus: Iterable[TrainingExample] = TRAINING_DATA,
        categories: Sequence[str] = CATEGORIES,
    ):
        self._corpus = tuple(corpus)
        self._categories = tuple(categories)
        self._word_index: Dict[str, int] = {}
        self._category_index: Dict[str, int] = {}
        self._reverse_category_index: Dict[int, str] = {}
        self._built = False

    def build(self) -> "Vocabulary":
        """Populate both indices on first call; later calls are no-ops."""
        if self._built:
            return self

        index = 1
        for example in self._corpus:
            for word in example.text.split(" "):
                if word not in self._word_index:
                    self._word_index[word] = index
                    index += 1

        for idx, category in enumerate(self._categories):
            self._category_index[category] = idx
            self._reverse_category_index[idx] = category

        self._built = True
        log.debug(
            "Vocabulary built: %d words, %d categories",
            len(self._word_index),
            len(self._category_index),
        )
        return self

    @property
    def is_built(self) -> bool:
        return self._built

    @property
    def size(self) -> int:
        return len(self._word_index)

    @property
    def feature_length(self) -> int:
        return self.size + 1

    @property
    def num_categories(self) -> int:
        return len(self._categories)

    @property
    def categories(self) -> tuple:
        return self._categories

    def word_index(self, word: str) -> int:
        return self._word_index.get(word, 0)

    def category_id(self, category: str) -> int:
        return self._category_index[category]

    def category_label(self, category_id: int) -> Optional[str]:
        return self._reverse_category_index.get(int(category_id))

    def words(self) -> Dict[str, int]:
        """Copy of the word index (for inspection/tests)."""
        return dict(self._word_index)

    def require_built(self) -> None:
        if not self._built:
            raise VocabularyNotBuiltError("Vocabulary.build() has not been called")
