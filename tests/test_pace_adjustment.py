"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

import pytest

from services.splits.pace_adjustment import (
    ProfiledSplit,
    actual_pace_for_target_gap,
    adjustment_factor,
    apply_goal_time_even_effort,
    grade_adjusted_pace,
    minetti_energy_cost_running,
)
from services.splits.timing import EnhancedSplit
from utils.elevation import GradeStats


def _split(label: str, distance: float, cumulative: float, segment: float, grade: float | None) -> EnhancedSplit:
    return EnhancedSplit(
        label=label,
        distance_label=f"{distance:.2f} mi",
        distance=distance,
        cumulative_seconds=cumulative,
        segment_seconds=segment,
        priority=2,
        elevation=0.0 if grade is not None else None,
        grade=grade,
        grade_range=GradeStats(grade, grade, grade) if grade is not None else None,
    )


def test_minetti_flat_cost() -> None:
    assert minetti_energy_cost_running(0.0) == pytest.approx(3.6)
    assert minetti_energy_cost_running(0.05) == pytest.approx(4.6851960625)


def test_minetti_clamps_grade() -> None:
    assert minetti_energy_cost_running(0.8) == minetti_energy_cost_running(0.5)
    assert minetti_energy_cost_running(-0.8) == minetti_energy_cost_running(-0.5)


def test_adjustment_factor_flat_is_exactly_one() -> None:
    assert adjustment_factor(0.0) == 1.0
    assert adjustment_factor(0.05) == 1.0
    assert adjustment_factor(-0.09) == 1.0


def test_adjustment_factor_is_asymmetric() -> None:
    up = adjustment_factor(5.0)
    down = adjustment_factor(-5.0)
    assert up == pytest.approx(4.6851960625 / 3.6)
    assert up > 1.0 > down
    assert up - 1.0 > 1.0 - down


def test_strategy_paces() -> None:
    factor = adjustment_factor(4.0)
    assert grade_adjusted_pace(450.0, 4.0) == pytest.approx(450.0 * factor)
    assert actual_pace_for_target_gap(450.0, 4.0) == pytest.approx(450.0 / factor)
    assert grade_adjusted_pace(450.0, 0.0) == 450.0
    assert actual_pace_for_target_gap(450.0, 0.0) == 450.0


def test_even_effort_uphill_pace_is_faster_than_flat() -> None:
    assert actual_pace_for_target_gap(450.0, 4.0) < 450.0
    assert grade_adjusted_pace(450.0, 4.0) > 450.0


def test_goal_time_rescaling_hits_total() -> None:
    pace = 400.0
    splits = [
        ProfiledSplit(_split("Mile 1", 1.0, 400.0, 400.0, 3.0), 0.0, 1.0),
        ProfiledSplit(_split("Mile 2", 2.0, 800.0, 400.0, -2.0), 1.0, 2.0),
        ProfiledSplit(_split("Finish", 2.5, 1000.0, 200.0, 0.0), 2.0, 2.5),
    ]
    out = apply_goal_time_even_effort(splits, pace, "mi", 2.5, "mi")

    assert sum(s.segment_seconds for s in out) == pytest.approx(1000.0, abs=1e-6)
    assert out[-1].cumulative_seconds == pytest.approx(1000.0, abs=1e-6)
    # uphill slowest, downhill fastest
    assert out[0].target_pace > out[2].target_pace > out[1].target_pace
    for s in out:
        assert 0.6 * pace < s.target_pace < 1.4 * pace


def test_goal_time_variation_bound_is_configurable() -> None:
    splits = [
        ProfiledSplit(_split("Mile 1", 1.0, 400.0, 400.0, 6.0), 0.0, 1.0),
        ProfiledSplit(_split("Mile 2", 2.0, 800.0, 400.0, -6.0), 1.0, 2.0),
    ]
    wide = apply_goal_time_even_effort(splits, 400.0, "mi", 2.0, "mi", max_variation=0.3)
    narrow = apply_goal_time_even_effort(splits, 400.0, "mi", 2.0, "mi", max_variation=0.1)
    assert wide[0].target_pace - wide[1].target_pace > narrow[0].target_pace - narrow[1].target_pace
    none = apply_goal_time_even_effort(splits, 400.0, "mi", 2.0, "mi", max_variation=0.0)
    assert none[0].target_pace == pytest.approx(400.0)
    assert none[1].target_pace == pytest.approx(400.0)


def test_goal_time_falls_back_without_weight() -> None:
    splits = [
        ProfiledSplit(_split("Mile 1", 1.0, 400.0, 400.0, None), 0.0, 1.0),
        ProfiledSplit(_split("Finish", 1.0, 400.0, 0.0, 2.0), 1.0, 1.0),
    ]
    out = apply_goal_time_even_effort(splits, 400.0, "mi", 1.0, "mi")
    # even pace: grade adjusted pace where grade data exists, flat pace elsewhere
    assert out[0].target_pace == 400.0
    assert out[1].target_pace == pytest.approx(grade_adjusted_pace(400.0, 2.0))
    assert [s.cumulative_seconds for s in out] == [400.0, 400.0]
