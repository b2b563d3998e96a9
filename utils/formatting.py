"""
Locale-aware display helpers for distances, durations and paces.

The split pipeline works on raw numbers; these helpers are for labels and
table rendering only.
"""

from __future__ import annotations

import math
from typing import Optional

from babel import numbers
from babel.core import UnknownLocaleError

from utils.constants import DISPLAY_LOCALE, DISTANCE_LABEL_DIGITS

LOCALE = DISPLAY_LOCALE

MISSING = "—"


def set_locale(locale_str: str = DISPLAY_LOCALE) -> None:
    global LOCALE
    try:
        # Validate by formatting a simple number
        numbers.format_decimal(1.0, locale=locale_str)
        LOCALE = locale_str
    except (ValueError, TypeError, UnknownLocaleError):
        LOCALE = DISPLAY_LOCALE


def fmt_decimal(value: Optional[float], digits: Optional[int] = None, locale: Optional[str] = None) -> str:
    if value is None:
        return ""
    fmt = None
    if digits is not None:
        fmt = "0" if digits == 0 else "0." + ("0" * digits)
    return numbers.format_decimal(value, format=fmt, locale=locale or LOCALE)


def fmt_distance(distance: float, unit: str, locale: Optional[str] = None) -> str:
    """Format a split distance label such as ``"13.11 mi"``."""
    return f"{fmt_decimal(distance, DISTANCE_LABEL_DIGITS, locale)} {unit}"


def fmt_hms(total_seconds: Optional[float]) -> str:
    """Format seconds as ``H:MM:SS`` (or ``M:SS`` under one hour).

    Returns an em dash for missing, negative or non-finite values.
    """
    if total_seconds is None or not math.isfinite(total_seconds) or total_seconds < 0:
        return MISSING
    secs = int(round(total_seconds))
    hours, rem = divmod(secs, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def fmt_pace(seconds_per_unit: Optional[float], unit: str) -> str:
    if seconds_per_unit is None:
        return MISSING
    return f"{fmt_hms(seconds_per_unit)}/{unit}"


def fmt_grade(grade_pct: Optional[float]) -> str:
    if grade_pct is None:
        return MISSING
    return f"{fmt_decimal(grade_pct, 1)}%"
