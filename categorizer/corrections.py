# categorizer/corrections.py
"""
Sink for user overrides of a predicted category.

Corrections are logged and dropped: nothing is persisted and the model is not
retrained. Swap in another object with a ``record(CorrectionRecord)`` method
to capture them.
"""
from __future__ import annotations

import logging

from spend_core.models import CorrectionRecord

log = logging.getLogger("categorizer.corrections")


class LoggingCorrectionSink:
    def record(self, correction: CorrectionRecord) -> None:
        log.info(
            'Correction recorded: "%s" should be "%s"',
            correction.description,
            correction.category,
        )
