# categorizer/service.py
"""
Categorizer service: rule-based and model-based category prediction.

The service owns the vocabulary, the trained model and the one-shot
initialization guard. Create one per process (or per test) and pass it to
consumers; ``get_default_service()`` provides a shared lazily-built instance.
"""
from __future__ import annotations

import asyncio
import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional, Sequence

from spend_core.models import (
    CorrectionRecord,
    Prediction,
    PredictionSource,
    TrainingExample,
)
from categorizer.corpus import CATEGORIES, TRAINING_DATA, is_category
from categorizer.corrections import LoggingCorrectionSink
from categorizer.features import encode
from categorizer.model import CategoryNet, ModelSettings, predict_proba, train_model
from categorizer import rules
from categorizer.vocabulary import Vocabulary

log = logging.getLogger("categorizer")

Trainer = Callable[[Vocabulary, Iterable[TrainingExample], ModelSettings], CategoryNet]


class ModelState(str, Enum):
    UNINITIALIZED = "uninitialized"
    TRAINING = "training"
    READY = "ready"
    FAILED = "failed"


def _as_text(description: Any) -> str:
    return "" if description is None else str(description)


class CategorizerService:
    """Predict expense categories from free-text descriptions."""

    def __init__(
        self,
        settings: Optional[ModelSettings] = None,
        corpus: Iterable[TrainingExample] = TRAINING_DATA,
        categories: Sequence[str] = CATEGORIES,
        sink: Optional[Any] = None,
        trainer: Trainer = train_model,
    ):
        self.settings = settings or ModelSettings()
        self._corpus = tuple(corpus)
        self._categories = tuple(categories)
        self._vocab = Vocabulary(self._corpus, self._categories)
        self._sink = sink or LoggingCorrectionSink()
        self._trainer = trainer
        self._model: Optional[CategoryNet] = None
        self._state = ModelState.UNINITIALIZED
        self._attempts = 0
        self._init_lock = threading.Lock()

    @classmethod
    def from_config(cls, cfg: Optional[Dict[str, Any]] = None, **kwargs) -> "CategorizerService":
        """Build from a loaded config dict (uses its ``[model]`` table)."""
        model_cfg = (cfg or {}).get("model", {})
        return cls(settings=ModelSettings.from_config(model_cfg), **kwargs)

    @property
    def state(self) -> ModelState:
        return self._state

    @property
    def vocabulary(self) -> Vocabulary:
        return self._vocab

    @property
    def categories(self) -> tuple:
        return self._categories

    # ------------------------------------------------------------------
    # Rule-based path
    # ------------------------------------------------------------------
    def predict_category(self, description: Optional[str]) -> str:
        """Synchronous keyword match; always returns a category."""
        return rules.predict_category(_as_text(description), self._corpus)

    def predict(self, description: Optional[str]) -> Prediction:
        return Prediction(
            category=self.predict_category(description),
            source=PredictionSource.RULES,
        )

    # ------------------------------------------------------------------
    # Model path
    # ------------------------------------------------------------------
    def _initialize(self, seen_attempts: Optional[int] = None) -> bool:
        """
        Train once. Runs in a worker thread; concurrent callers block on the lock.

        ``seen_attempts`` is the attempt count the caller observed before
        waiting. If another caller trained in the meantime, its outcome is
        shared instead of starting a new run.
        """
        with self._init_lock:
            if self._state is ModelState.READY:
                return True
            if seen_attempts is not None and seen_attempts != self._attempts:
                return False
            self._attempts += 1
            self._state = ModelState.TRAINING
            try:
                self._vocab.build()
                self._model = self._trainer(self._vocab, self._corpus, self.settings)
            except Exception:
                log.exception("Error training model")
                self._model = None
                self._state = ModelState.FAILED
                return False
            self._state = ModelState.READY
            return True

    async def ensure_model(self) -> bool:
        """Train on first use. Returns False when training failed (retried next call)."""
        if self._state is ModelState.READY:
            return True
        return await asyncio.to_thread(self._initialize, self._attempts)

    async def predict_with_model(self, description: Optional[str]) -> Prediction:
        """
        Model prediction with provenance. Falls back to the rule-based result
        when the model is unavailable, the forward pass fails, the argmax has
        no category, or the description has no known words.
        """
        text = _as_text(description)
        if not await self.ensure_model() or self._model is None:
            return self.predict(text)

        try:
            features = encode(text, self._vocab)
            if not features.any():
                return self.predict(text)
            probs = predict_proba(self._model, features)
            category_id = int(probs.argmax())
            label = self._vocab.category_label(category_id)
        except Exception:
            log.exception("Error predicting with model")
            return self.predict(text)

        if label is None:
            log.warning("Model produced unmapped category id %d", category_id)
            return self.predict(text)

        return Prediction(
            category=label,
            source=PredictionSource.MODEL,
            confidence=float(probs[category_id]),
        )

    async def predict_category_with_model(self, description: Optional[str]) -> str:
        prediction = await self.predict_with_model(description)
        return prediction.category

    # ------------------------------------------------------------------
    # Corrections
    # ------------------------------------------------------------------
    async def record_user_correction(self, description: Optional[str], category: str) -> None:
        """Hand a user override to the correction sink. Never raises."""
        if not is_category(category):
            log.warning("Correction uses unknown category %r", category)
        try:
            self._sink.record(CorrectionRecord(_as_text(description), category))
        except Exception:
            log.exception("Correction sink failed")


# ----------------------------------------------------------------------
# Process-wide default instance
# ----------------------------------------------------------------------
_default_service: Optional[CategorizerService] = None
_default_lock = threading.Lock()


def get_default_service() -> CategorizerService:
    global _default_service
    with _default_lock:
        if _default_service is None:
            from config.loader import load_config

            _default_service = CategorizerService.from_config(load_config())
        return _default_service


def predict_category(description: Optional[str]) -> str:
    return get_default_service().predict_category(description)


async def predict_category_with_model(description: Optional[str]) -> str:
    return await get_default_service().predict_category_with_model(description)


async def record_user_correction(description: Optional[str], category: str) -> None:
    await get_default_service().record_user_correction(description, category)
