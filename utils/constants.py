"""Copyright (C) 2025 Pierre Marrec
SPDX-License-Identifier: GPL-3.0-or-later
"""

from __future__ import annotations

# ==============================================================================
# UNITS
# ==============================================================================

KM_PER_MI = 1.609344
MI_PER_KM = 1 / KM_PER_MI
FEET_PER_MILE = 5280
DISTANCE_UNITS = ("mi", "km")

# ==============================================================================
# SPLIT MARKERS
# ==============================================================================

# Tolerance against floor() landing one short on values like 4.9999999
MARKER_FLOOR_EPS = 1e-6
# Resolution of the merge key used to deduplicate coincident markers
MARKER_MERGE_EPS = 1e-4
# Last marker farther than this from the total distance gets a Finish row
FINISH_EPS = 1e-4

FIVE_K_STEP_KM = 5

PRIORITY_HALFWAY = 0
PRIORITY_FIVE_K = 1
PRIORITY_WHOLE_UNIT = 2
PRIORITY_FINISH = 3

LABEL_HALFWAY = "Halfway"
LABEL_FINISH = "Finish"

# Display precision of distance labels, also used for elevation lookups
DISTANCE_LABEL_DIGITS = 2

# ==============================================================================
# PACING
# ==============================================================================

PACING_STRATEGIES = ("even-pace", "even-effort")
DEFAULT_PACING_STRATEGY = "even-pace"

# Grades (percent) below this magnitude are treated as flat
FLAT_GRADE_THRESHOLD_PCT = 0.1
# Natural pace variation bound for goal-time even effort (fraction of flat pace)
MAX_EFFORT_VARIATION = 0.30

# Minetti polynomial was fitted on slopes between -45% and +45%
MINETTI_GRADE_LIMIT = 0.5

# ==============================================================================
# DISPLAY
# ==============================================================================

DISPLAY_LOCALE = "en_US"
