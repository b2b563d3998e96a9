"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Elevation-related helpers.

Profiles are ordered sequences of ``ElevationPoint`` with distances in miles
and elevations in feet. Grades are returned in percent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from utils.constants import FEET_PER_MILE


@dataclass(frozen=True)
class ElevationPoint:
    distance: float
    elevation: float


@dataclass(frozen=True)
class GradeStats:
    weighted_avg: float
    min: float
    max: float


def validate_profile(profile: Sequence[ElevationPoint]) -> None:
    """Raise ValueError unless the profile has >= 2 points sorted by distance."""
    if profile is None or len(profile) < 2:
        raise ValueError("Elevation profile needs at least 2 points")
    distances = np.asarray([p.distance for p in profile], dtype=float)
    if not np.isfinite(distances).all():
        raise ValueError("Elevation profile distances must be finite")
    if np.any(np.diff(distances) < 0):
        raise ValueError("Elevation profile must be sorted ascending by distance")


def profile_from_dataframe(
    df: pd.DataFrame, distance_col: str = "distance", elevation_col: str = "elevation"
) -> list[ElevationPoint]:
    """Build a profile from a DataFrame, dropping rows with missing values.

    Args:
        df: DataFrame holding one sample per row
        distance_col: Column with distances in miles
        elevation_col: Column with elevations in feet

    Returns:
        Profile sorted ascending by distance
    """
    if df.empty:
        return []
    data = df[[distance_col, elevation_col]].apply(pd.to_numeric, errors="coerce").dropna()
    data = data.sort_values(distance_col, kind="stable")
    return [
        ElevationPoint(distance=float(d), elevation=float(e))
        for d, e in zip(data[distance_col], data[elevation_col])
    ]


def _profile_arrays(profile: Sequence[ElevationPoint]) -> tuple[np.ndarray, np.ndarray]:
    distances = np.fromiter((p.distance for p in profile), dtype=float, count=len(profile))
    elevations = np.fromiter((p.elevation for p in profile), dtype=float, count=len(profile))
    return distances, elevations


def compute_grade(p1: ElevationPoint, p2: ElevationPoint) -> float:
    """Grade (percent) between two profile points; 0 for a non-positive run."""
    run_ft = (p2.distance - p1.distance) * FEET_PER_MILE
    if run_ft <= 0:
        return 0.0
    return (p2.elevation - p1.elevation) / run_ft * 100


def elevation_at(profile: Sequence[ElevationPoint], distance: float) -> float:
    """Linearly interpolate elevation at a distance, clamped to the profile ends.

    Interpolates on the first pair of points bracketing ``distance``, so a
    distance shared by several points resolves to the earliest of them.
    """
    distances, elevations = _profile_arrays(profile)
    if distance <= distances[0]:
        return float(elevations[0])
    if distance >= distances[-1]:
        return float(elevations[-1])
    # distances[i - 1] < distance <= distances[i]
    i = int(np.searchsorted(distances, distance, side="left"))
    d1, d2 = distances[i - 1], distances[i]
    e1, e2 = elevations[i - 1], elevations[i]
    return float(e1 + (e2 - e1) * (distance - d1) / (d2 - d1))


def average_grade(profile: Sequence[ElevationPoint], start: float, end: float) -> float:
    """Endpoint grade (percent) over ``[start, end]`` using interpolated elevations."""
    if start >= end:
        return 0.0
    run_ft = (end - start) * FEET_PER_MILE
    rise_ft = elevation_at(profile, end) - elevation_at(profile, start)
    return rise_ft / run_ft * 100


def grade_stats(profile: Sequence[ElevationPoint], start: float, end: float) -> GradeStats:
    """Distance-weighted grade statistics over ``[start, end]``.

    Uses the profile points lying inside the interval. With fewer than two such
    points, falls back to the endpoint grade for avg, min and max.

    Args:
        profile: Elevation profile (miles / feet)
        start: Segment start in miles
        end: Segment end in miles

    Returns:
        GradeStats with weighted average, min and max grade in percent
    """
    distances, elevations = _profile_arrays(profile)
    mask = (distances >= start) & (distances <= end)
    if int(mask.sum()) < 2:
        avg = average_grade(profile, start, end)
        return GradeStats(weighted_avg=avg, min=avg, max=avg)

    seg_len = np.diff(distances[mask])
    rise = np.diff(elevations[mask])
    run_ft = seg_len * FEET_PER_MILE
    grades = np.zeros_like(seg_len)
    np.divide(rise * 100, run_ft, out=grades, where=run_ft > 0)

    total_len = float(seg_len.sum())
    weighted_avg = float((grades * seg_len).sum() / total_len) if total_len > 0 else 0.0
    return GradeStats(
        weighted_avg=weighted_avg,
        min=float(grades.min()),
        max=float(grades.max()),
    )
