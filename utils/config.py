"""
Configuration loading utilities.

Loads environment variables from `.env` and validates the tunable pacing
parameters. Invalid values fall back to the defaults in `utils.constants`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv
from streamlit.logger import get_logger

from utils.constants import (
    DISPLAY_LOCALE,
    FLAT_GRADE_THRESHOLD_PCT,
    MAX_EFFORT_VARIATION,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class Config:
    locale: str = DISPLAY_LOCALE
    max_effort_variation: float = MAX_EFFORT_VARIATION
    flat_grade_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT


def _env_float(name: str, default: float, *, lower: float, upper: float) -> float:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except (ValueError, TypeError):
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return default
    if not lower <= value <= upper:
        logger.warning("Ignoring out-of-range %s=%s (expected %s..%s)", name, value, lower, upper)
        return default
    return value


def load_config() -> Config:
    """Load configuration from environment."""
    load_dotenv(find_dotenv(usecwd=True), override=False)

    locale = os.getenv("SPLITS_LOCALE") or DISPLAY_LOCALE
    max_effort_variation = _env_float(
        "SPLITS_MAX_EFFORT_VARIATION", MAX_EFFORT_VARIATION, lower=0.0, upper=1.0
    )
    flat_grade_threshold_pct = _env_float(
        "SPLITS_FLAT_GRADE_THRESHOLD", FLAT_GRADE_THRESHOLD_PCT, lower=0.0, upper=50.0
    )
    logger.debug(
        "Config: locale=%s max_effort_variation=%s flat_grade_threshold_pct=%s",
        locale,
        max_effort_variation,
        flat_grade_threshold_pct,
    )

    return Config(
        locale=locale,
        max_effort_variation=max_effort_variation,
        flat_grade_threshold_pct=flat_grade_threshold_pct,
    )
