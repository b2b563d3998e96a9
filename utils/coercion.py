"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Type coercion utilities for converting caller inputs safely to float.
"""

from __future__ import annotations

import math
from typing import Optional


def safe_float_optional(value: object) -> Optional[float]:
    """Safely convert a value to float, returning None on failure.

    Handles None, empty strings, "NaN", infinities and booleans by returning None.

    Args:
        value: Value to convert

    Returns:
        Optional[float]: Converted value or None if conversion fails
    """
    if isinstance(value, bool):
        return None
    try:
        if value in (None, "", "NaN"):
            return None
        result = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def positive_float_optional(value: object) -> Optional[float]:
    """Return the value as a finite float strictly greater than zero, else None."""
    result = safe_float_optional(value)
    if result is None or result <= 0:
        return None
    return result
