"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later

Grade-based target paces from the Minetti et al. (2002) cost of running.

Two strategies:
- even pace: the runner holds the flat pace, the target pace is the grade
  adjusted pace (what the flat pace feels like on the segment);
- even effort: the target pace is the actual pace to run on the segment,
  flat pace divided by the cost factor. Uphill segments therefore come out
  faster than flat pace.

In goal-time mode, even effort paces are rescaled so that the split times add
up exactly to the goal time.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace

from streamlit.logger import get_logger

from services.splits.timing import EnhancedSplit
from utils.constants import FLAT_GRADE_THRESHOLD_PCT, MAX_EFFORT_VARIATION, MINETTI_GRADE_LIMIT
from utils.units import Unit, convert_distance_to

logger = get_logger(__name__)


def minetti_energy_cost_running(grade: float) -> float:
    """Calculate energy cost of running (J/kg/m) at a given grade using Minetti et al. (2002).

    Args:
        grade: Slope as a decimal (0.05 for +5%), clamped to the fitted range
    """
    if grade >= MINETTI_GRADE_LIMIT:
        grade = MINETTI_GRADE_LIMIT
    elif grade <= -MINETTI_GRADE_LIMIT:
        grade = -MINETTI_GRADE_LIMIT

    return (
        155.4 * grade**5
        - 30.4 * grade**4
        - 43.3 * grade**3
        + 46.3 * grade**2
        + 19.5 * grade
        + 3.6
    )


def adjustment_factor(grade_pct: float, flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT) -> float:
    """Cost of running at ``grade_pct`` relative to flat ground (1.0 when flat)."""
    if abs(grade_pct) < flat_threshold_pct:
        return 1.0
    return minetti_energy_cost_running(grade_pct / 100) / minetti_energy_cost_running(0.0)


def grade_adjusted_pace(
    flat_pace: float, grade_pct: float, flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT
) -> float:
    """Effort-equivalent pace of holding ``flat_pace`` on a graded segment."""
    return flat_pace * adjustment_factor(grade_pct, flat_threshold_pct)


def actual_pace_for_target_gap(
    flat_pace: float, grade_pct: float, flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT
) -> float:
    """Pace to run on a graded segment for the effort of ``flat_pace`` on flat ground.

    Divides by the cost factor, so an uphill grade yields a pace faster than
    ``flat_pace``.
    """
    return flat_pace / adjustment_factor(grade_pct, flat_threshold_pct)


@dataclass(frozen=True)
class ProfiledSplit:
    """A split with elevation data and the profile-unit (miles) bounds of its segment."""

    split: EnhancedSplit
    start_mi: float
    end_mi: float

    @property
    def length_mi(self) -> float:
        return self.end_mi - self.start_mi


def apply_even_pace(
    splits: list[ProfiledSplit], flat_pace: float, flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT
) -> list[EnhancedSplit]:
    """Set each split's target pace to its grade adjusted pace."""
    out: list[EnhancedSplit] = []
    for item in splits:
        grade_range = item.split.grade_range
        target = (
            grade_adjusted_pace(flat_pace, grade_range.weighted_avg, flat_threshold_pct)
            if grade_range is not None
            else flat_pace
        )
        out.append(replace(item.split, target_pace=target))
    return out


def apply_even_effort(
    splits: list[ProfiledSplit], flat_pace: float, flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT
) -> list[EnhancedSplit]:
    """Set each split's target pace to the actual pace matching the flat effort."""
    out: list[EnhancedSplit] = []
    for item in splits:
        grade_range = item.split.grade_range
        target = (
            actual_pace_for_target_gap(flat_pace, grade_range.weighted_avg, flat_threshold_pct)
            if grade_range is not None
            else flat_pace
        )
        out.append(replace(item.split, target_pace=target))
    return out


def apply_goal_time_even_effort(
    splits: list[ProfiledSplit],
    flat_pace: float,
    pace_unit: Unit,
    total_distance: float,
    distance_unit: Unit,
    max_variation: float = MAX_EFFORT_VARIATION,
    flat_threshold_pct: float = FLAT_GRADE_THRESHOLD_PCT,
) -> list[EnhancedSplit]:
    """Distribute a goal time over the splits by relative metabolic cost.

    Pass 1 derives a natural pace per segment from its cost ratio ``r`` to the
    distance-weighted race average: ``flat_pace * ((1 - m) + 2 * m * r)`` with
    ``m = max_variation``. Pass 2 divides every natural pace and segment time by
    ``natural_total / goal_total`` so the cumulative time of the last split is
    the goal time.

    Args:
        splits: Splits with grade statistics, ascending by distance
        flat_pace: Goal pace in seconds per ``pace_unit`` (goal time / distance)
        pace_unit: Unit the pace is keyed to
        total_distance: Race distance in ``distance_unit``
        distance_unit: Unit of the race distance
        max_variation: Natural pace variation bound (fraction of flat pace)
        flat_threshold_pct: Flat-ground threshold for the even-pace fallback

    Returns:
        Splits with rescaled segment/cumulative times and target paces
    """
    costs: list[float] = []
    total_weight = 0.0
    total_mi = 0.0
    for item in splits:
        grade_range = item.split.grade_range
        if grade_range is None or item.length_mi <= 0:
            costs.append(math.nan)
            continue
        cost = minetti_energy_cost_running(grade_range.weighted_avg / 100)
        costs.append(cost)
        total_weight += item.length_mi * cost
        total_mi += item.length_mi

    if not (math.isfinite(total_weight) and math.isfinite(total_mi)) or total_weight <= 0 or total_mi <= 0:
        logger.warning("Invalid metabolic cost data, falling back to even pace")
        return apply_even_pace(splits, flat_pace, flat_threshold_pct)

    average_cost = total_weight / total_mi

    natural: list[tuple[float, float, bool]] = []
    natural_total = 0.0
    for item, cost in zip(splits, costs):
        if math.isnan(cost):
            natural.append((flat_pace, item.split.segment_seconds, False))
            natural_total += item.split.segment_seconds
            continue
        effort_ratio = cost / average_cost
        natural_pace = flat_pace * ((1 - max_variation) + effort_ratio * 2 * max_variation)
        segment_time = natural_pace * convert_distance_to(pace_unit, item.length_mi, "mi")
        natural.append((natural_pace, segment_time, True))
        natural_total += segment_time

    goal_total = convert_distance_to(pace_unit, total_distance, distance_unit) * flat_pace
    scale = natural_total / goal_total if goal_total > 0 else math.nan
    if not math.isfinite(scale) or scale <= 0:
        logger.warning("Invalid goal-time scaling (natural=%s, goal=%s), falling back to even pace", natural_total, goal_total)
        return apply_even_pace(splits, flat_pace, flat_threshold_pct)

    logger.debug("Goal-time rescaling: natural=%.1fs goal=%.1fs scale=%.4f", natural_total, goal_total, scale)

    out: list[EnhancedSplit] = []
    cumulative = 0.0
    for item, (natural_pace, segment_time, has_length) in zip(splits, natural):
        segment_seconds = segment_time / scale
        cumulative += segment_seconds
        out.append(
            replace(
                item.split,
                cumulative_seconds=cumulative,
                segment_seconds=segment_seconds,
                target_pace=natural_pace / scale if has_length else flat_pace,
            )
        )
    return out
