"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Split marker generation and deduplication.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from utils.constants import (
    FIVE_K_STEP_KM,
    LABEL_HALFWAY,
    MARKER_FLOOR_EPS,
    MARKER_MERGE_EPS,
    PRIORITY_FIVE_K,
    PRIORITY_HALFWAY,
    PRIORITY_WHOLE_UNIT,
)
from utils.units import Unit, convert_distance_to


@dataclass(frozen=True)
class SplitMarker:
    """Labeled distance point; lower priority wins when markers coincide."""

    label: str
    distance: float
    priority: int


def whole_unit_label(index: int, distance_unit: Unit) -> str:
    return f"Mile {index}" if distance_unit == "mi" else f"{index} km"


def build_split_markers(total_distance: float, distance_unit: Unit) -> list[SplitMarker]:
    """Build whole-unit, 5K and halfway markers for a race.

    Args:
        total_distance: Race distance in ``distance_unit``
        distance_unit: Unit of the race distance ("mi" or "km")

    Returns:
        Unordered markers, possibly coincident, all in ``distance_unit``
    """
    markers: list[SplitMarker] = []

    whole_max = math.floor(total_distance + MARKER_FLOOR_EPS)
    for i in range(1, whole_max + 1):
        markers.append(
            SplitMarker(label=whole_unit_label(i, distance_unit), distance=float(i), priority=PRIORITY_WHOLE_UNIT)
        )

    total_km = convert_distance_to("km", total_distance, distance_unit)
    five_k_count = math.floor(total_km / FIVE_K_STEP_KM + MARKER_FLOOR_EPS)
    for k in range(1, five_k_count + 1):
        km_at_mark = k * FIVE_K_STEP_KM
        markers.append(
            SplitMarker(
                label=f"{km_at_mark}K",
                distance=convert_distance_to(distance_unit, float(km_at_mark), "km"),
                priority=PRIORITY_FIVE_K,
            )
        )

    markers.append(SplitMarker(label=LABEL_HALFWAY, distance=total_distance / 2, priority=PRIORITY_HALFWAY))
    return markers


def deduplicate_markers(markers: list[SplitMarker]) -> list[SplitMarker]:
    """Merge markers sharing a rounded distance key, keeping the highest precedence.

    Returns:
        Markers sorted ascending by distance, one per merge key
    """
    by_key: dict[int, SplitMarker] = {}
    for marker in markers:
        key = round(marker.distance / MARKER_MERGE_EPS)
        existing = by_key.get(key)
        if existing is None or marker.priority < existing.priority:
            by_key[key] = marker
    return sorted(by_key.values(), key=lambda m: m.distance)
