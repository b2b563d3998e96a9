"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Flat-pace split timing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from services.splits.markers import SplitMarker
from utils.constants import FINISH_EPS, LABEL_FINISH, PRIORITY_FINISH
from utils.elevation import GradeStats
from utils.formatting import fmt_distance
from utils.units import Unit, convert_distance_to


@dataclass(frozen=True)
class SplitRow:
    label: str
    distance_label: str
    # Raw distance in the caller's distance unit
    distance: float
    cumulative_seconds: float
    segment_seconds: float
    priority: int


def calculate_split_times(
    markers: list[SplitMarker],
    total_distance: float,
    distance_unit: Unit,
    pace_unit: Unit,
    pace_seconds_per_unit: float,
    locale: Optional[str] = None,
) -> list[SplitRow]:
    """Compute cumulative and segment times at a flat pace.

    Appends a Finish row when the last marker does not sit on the total distance.

    Args:
        markers: Deduplicated markers sorted ascending by distance
        total_distance: Race distance in ``distance_unit``
        distance_unit: Unit of marker distances
        pace_unit: Unit the pace is keyed to
        pace_seconds_per_unit: Flat pace in seconds per ``pace_unit``
        locale: Babel locale for distance labels (module default when None)

    Returns:
        One row per marker, plus an optional Finish row
    """
    rows: list[SplitRow] = []
    prev_in_pace_unit = 0.0

    last_index = len(markers) - 1
    for index, marker in enumerate(markers):
        timed_distance = marker.distance
        # A last marker within tolerance of the finish carries the exact total time
        if index == last_index and abs(marker.distance - total_distance) <= FINISH_EPS:
            timed_distance = total_distance
        in_pace_unit = convert_distance_to(pace_unit, timed_distance, distance_unit)
        segment_in_pace_unit = max(0.0, in_pace_unit - prev_in_pace_unit)
        rows.append(
            SplitRow(
                label=marker.label,
                distance_label=fmt_distance(marker.distance, distance_unit, locale),
                distance=marker.distance,
                cumulative_seconds=in_pace_unit * pace_seconds_per_unit,
                segment_seconds=segment_in_pace_unit * pace_seconds_per_unit,
                priority=marker.priority,
            )
        )
        prev_in_pace_unit = in_pace_unit

    last_distance = markers[-1].distance if markers else 0.0
    if abs(last_distance - total_distance) > FINISH_EPS:
        total_in_pace_unit = convert_distance_to(pace_unit, total_distance, distance_unit)
        segment_in_pace_unit = max(0.0, total_in_pace_unit - prev_in_pace_unit)
        rows.append(
            SplitRow(
                label=LABEL_FINISH,
                distance_label=fmt_distance(total_distance, distance_unit, locale),
                distance=total_distance,
                cumulative_seconds=total_in_pace_unit * pace_seconds_per_unit,
                segment_seconds=segment_in_pace_unit * pace_seconds_per_unit,
                priority=PRIORITY_FINISH,
            )
        )

    return rows


@dataclass(frozen=True)
class EnhancedSplit(SplitRow):
    """Split row annotated with terrain data and a target pace.

    Terrain fields are None when no elevation profile was supplied.
    """

    elevation: Optional[float] = None
    grade: Optional[float] = None
    grade_range: Optional[GradeStats] = None
    target_pace: Optional[float] = None
