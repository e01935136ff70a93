# spend_utils/logging_setup.py
import logging
from typing import Literal, Optional

Level = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(level: Level = "INFO", cfg: Optional[dict] = None) -> None:
    """
    Configure the root logger once. A ``[logging]`` config table, when given,
    overrides ``level``.
    """
    if cfg:
        level = str(cfg.get("level", level)).upper()  # type: ignore[assignment]
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # PIL logs every image decode at DEBUG
    logging.getLogger("PIL").setLevel(logging.WARNING)
