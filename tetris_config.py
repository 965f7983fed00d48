"""Tuning constants, overridable from TETRIS_* environment variables"""
import logging
import os
from typing import Mapping, Optional

log = logging.getLogger(__name__)

CONFIG = {
    "WIDTH": 10,
    "HEIGHT": 20,
    "FRAME_MS": 50,
    "BASE_FALL_MS": 800.0,
    "FALL_STEP_MS": 60.0,
    "MIN_FALL_MS": 60.0,
    "LINES_PER_LEVEL": 10,
    "SPAWN_X": None,
    "SOFT_DROP_POINTS": 0,
    "HARD_DROP_POINTS": 0,
    "SEED": None,
    "BACKEND": "auto",
    "CELL_SIZE": 32,
    "LOG_FILE": None,
    "LOG_LEVEL": "INFO",
}

_DEFAULTS = dict(CONFIG)
# keys whose default is None still need a type for env parsing
_OPTIONAL_INT = {"SPAWN_X", "SEED"}
_NULLABLE = {k for k, v in _DEFAULTS.items() if v is None}


def _convert(key: str, raw: str):
    default = _DEFAULTS[key]
    if raw.strip().lower() in ("", "none"):
        if key in _NULLABLE:
            return None
        raise ValueError("empty")
    if key in _OPTIONAL_INT or isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


def apply_env(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Override CONFIG entries from TETRIS_<KEY> variables; returns the changed keys."""
    environ = os.environ if environ is None else environ
    changed = {}
    for key in CONFIG:
        raw = environ.get("TETRIS_" + key)
        if raw is None: continue
        try:
            value = _convert(key, raw)
        except ValueError:
            raise ValueError(f"TETRIS_{key}: cannot parse {raw!r}") from None
        CONFIG[key] = changed[key] = value
    if changed:
        log.debug("config overrides from environment: %s", changed)
    return changed
