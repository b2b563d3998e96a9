"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Splits service for race pacing.

Builds distance markers (whole units, 5K multiples, halfway), times them at a
flat pace, samples the elevation profile over each segment and derives a
target pace per split for the selected pacing strategy.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Literal, Optional, Sequence

import pandas as pd
from streamlit.logger import get_logger

from services.splits.markers import build_split_markers, deduplicate_markers
from services.splits.pace_adjustment import (
    ProfiledSplit,
    apply_even_effort,
    apply_even_pace,
    apply_goal_time_even_effort,
)
from services.splits.timing import EnhancedSplit, SplitRow, calculate_split_times
from utils.coercion import positive_float_optional
from utils.config import Config, load_config
from utils.constants import (
    DISTANCE_LABEL_DIGITS,
    DISTANCE_UNITS,
    LABEL_FINISH,
    PACING_STRATEGIES,
    PRIORITY_WHOLE_UNIT,
)
from utils.elevation import ElevationPoint, elevation_at, grade_stats, validate_profile
from utils.units import Unit, to_miles

logger = get_logger(__name__)

PacingStrategy = Literal["even-pace", "even-effort"]

SPLIT_COLUMNS = [
    "label",
    "distanceLabel",
    "distance",
    "cumulativeSeconds",
    "segmentSeconds",
    "priority",
    "elevation",
    "grade",
    "gradeMin",
    "gradeMax",
    "targetPace",
]


class SplitsService:
    """Service for race split computation."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    @classmethod
    def from_env(cls) -> "SplitsService":
        """Build a service configured from `.env` / environment variables."""
        return cls(load_config())

    def build_splits(
        self,
        total_distance: float,
        distance_unit: Unit,
        pace_unit: Unit,
        pace_seconds_per_unit: Optional[float],
        elevation_profile: Optional[Sequence[ElevationPoint]] = None,
        pacing_strategy: PacingStrategy = "even-pace",
        is_goal_time_mode: bool = False,
    ) -> list[EnhancedSplit]:
        """Compute annotated splits for a race.

        Args:
            total_distance: Race distance in ``distance_unit``
            distance_unit: Unit of the race distance ("mi" or "km")
            pace_unit: Unit the pace is keyed to ("mi" or "km")
            pace_seconds_per_unit: Flat pace in seconds per ``pace_unit``
            elevation_profile: Optional profile (miles / feet)
            pacing_strategy: "even-pace" or "even-effort"
            is_goal_time_mode: True when the pace was derived from a goal time

        Returns:
            Splits ascending by distance, ending at the finish. Empty when the
            distance or pace is missing or invalid.
        """
        distance = positive_float_optional(total_distance)
        pace = positive_float_optional(pace_seconds_per_unit)
        if distance is None or pace is None:
            logger.debug("Insufficient input: distance=%r pace=%r", total_distance, pace_seconds_per_unit)
            return []
        if distance_unit not in DISTANCE_UNITS or pace_unit not in DISTANCE_UNITS:
            logger.debug("Unsupported units: distance=%r pace=%r", distance_unit, pace_unit)
            return []
        if pacing_strategy not in PACING_STRATEGIES:
            logger.debug("Unsupported pacing strategy: %r", pacing_strategy)
            return []

        markers = deduplicate_markers(build_split_markers(distance, distance_unit))
        rows = calculate_split_times(markers, distance, distance_unit, pace_unit, pace, locale=self.config.locale)
        logger.debug("Built %d splits for %s %s", len(rows), distance, distance_unit)

        profile = self._usable_profile(elevation_profile)
        if profile is None:
            return [self._plain_split(row, pace) for row in rows]

        profiled = self.add_elevation_data(rows, profile, distance_unit)
        threshold = self.config.flat_grade_threshold_pct

        if pacing_strategy == "even-effort" and is_goal_time_mode:
            return apply_goal_time_even_effort(
                profiled,
                pace,
                pace_unit,
                distance,
                distance_unit,
                max_variation=self.config.max_effort_variation,
                flat_threshold_pct=threshold,
            )
        if pacing_strategy == "even-effort":
            return apply_even_effort(profiled, pace, threshold)
        return apply_even_pace(profiled, pace, threshold)

    def _usable_profile(
        self, elevation_profile: Optional[Sequence[ElevationPoint]]
    ) -> Optional[Sequence[ElevationPoint]]:
        if not elevation_profile:
            return None
        try:
            validate_profile(elevation_profile)
        except ValueError as e:
            logger.warning("Ignoring elevation profile: %s", e)
            return None
        return elevation_profile

    @staticmethod
    def _plain_split(row: SplitRow, pace: Optional[float]) -> EnhancedSplit:
        return EnhancedSplit(
            label=row.label,
            distance_label=row.distance_label,
            distance=row.distance,
            cumulative_seconds=row.cumulative_seconds,
            segment_seconds=row.segment_seconds,
            priority=row.priority,
            target_pace=pace,
        )

    def add_elevation_data(
        self, rows: list[SplitRow], profile: Sequence[ElevationPoint], distance_unit: Unit
    ) -> list[ProfiledSplit]:
        """Attach elevation and grade statistics to each split.

        Split distances are taken at label precision and converted to miles,
        the profile's native unit. Each split's grade covers the segment from
        the previous split (or the start).
        """
        profiled: list[ProfiledSplit] = []
        prev_mi = 0.0
        for row in rows:
            dist_mi = to_miles(round(row.distance, DISTANCE_LABEL_DIGITS), distance_unit)
            stats = grade_stats(profile, prev_mi, dist_mi)
            split = replace(
                self._plain_split(row, None),
                elevation=float(round(elevation_at(profile, dist_mi))),
                grade=round(stats.weighted_avg, 1),
                grade_range=stats,
            )
            profiled.append(ProfiledSplit(split=split, start_mi=prev_mi, end_mi=dist_mi))
            prev_mi = dist_mi
        return profiled

    def primary_splits(self, splits: list[EnhancedSplit]) -> list[EnhancedSplit]:
        """Whole-unit splits plus the finish (the pace band subset)."""
        return [s for s in splits if s.priority == PRIORITY_WHOLE_UNIT or s.label == LABEL_FINISH]

    def splits_to_dataframe(self, splits: list[EnhancedSplit]) -> pd.DataFrame:
        """Tabular view of splits for renderers."""
        if not splits:
            return pd.DataFrame(columns=SPLIT_COLUMNS)
        records = [
            {
                "label": s.label,
                "distanceLabel": s.distance_label,
                "distance": s.distance,
                "cumulativeSeconds": s.cumulative_seconds,
                "segmentSeconds": s.segment_seconds,
                "priority": s.priority,
                "elevation": s.elevation,
                "grade": s.grade,
                "gradeMin": s.grade_range.min if s.grade_range else None,
                "gradeMax": s.grade_range.max if s.grade_range else None,
                "targetPace": s.target_pace,
            }
            for s in splits
        ]
        return pd.DataFrame.from_records(records, columns=SPLIT_COLUMNS)

    def summarize(self, splits: list[EnhancedSplit]) -> dict:
        """Aggregate distance, time and elevation change over the splits."""
        summary = {
            "distance": 0.0,
            "timeSec": 0.0,
            "elevGainFt": 0.0,
            "elevLossFt": 0.0,
            "splitCount": len(splits),
        }
        if not splits:
            return summary

        summary["distance"] = splits[-1].distance
        summary["timeSec"] = splits[-1].cumulative_seconds

        elevations = [s.elevation for s in splits if s.elevation is not None]
        for prev, curr in zip(elevations, elevations[1:]):
            delta = curr - prev
            if delta > 0:
                summary["elevGainFt"] += delta
            else:
                summary["elevLossFt"] -= delta
        return summary
