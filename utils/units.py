"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Distance unit conversion between miles and kilometers.
"""

from __future__ import annotations

import math
from typing import Literal

from utils.constants import KM_PER_MI, MI_PER_KM

Unit = Literal["mi", "km"]


def convert_distance_to(target_unit: Unit, value: float, from_unit: Unit) -> float:
    """Convert a distance from ``from_unit`` into ``target_unit``.

    Args:
        target_unit: Unit to convert into ("mi" or "km")
        value: Distance expressed in ``from_unit``
        from_unit: Unit of ``value``

    Returns:
        Converted distance, or NaN when ``value`` is not finite
    """
    if not math.isfinite(value):
        return math.nan
    if target_unit == from_unit:
        return value
    return value * MI_PER_KM if target_unit == "mi" else value * KM_PER_MI


def to_miles(value: float, unit: Unit) -> float:
    """Convert a distance to miles, the native unit of elevation profiles."""
    return value if unit == "mi" else value / KM_PER_MI
