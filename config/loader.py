# config/loader.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

# Python 3.11 has tomllib; fall back to "tomli" on older versions if needed
try:
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

REPO = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG = REPO / "config.toml"


def load_config(config_path: Path | None = None) -> Dict[str, Any]:
    """
    Load config.toml from repo root by default.

    An explicit path that does not exist is an error; a missing default file
    yields an empty config so every section falls back to code defaults.
    """
    if config_path is None:
        if not DEFAULT_CONFIG.exists():
            return {}
        config_path = DEFAULT_CONFIG

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    with config_path.open("rb") as f:
        return tomllib.load(f)


def section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config table, or {} when absent or not a table."""
    value = cfg.get(name, {})
    return value if isinstance(value, dict) else {}
