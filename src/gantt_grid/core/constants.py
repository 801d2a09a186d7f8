"""Centralized constants for the Gantt grid engine.

This file contains:
- Floating-point comparison tolerance
- Snap unit ordering
"""

from datetime import timedelta

# Tolerance for pixel width comparisons (px).
EPSILON = 1e-6

ONE_DAY = timedelta(days=1)

# --- Snapping ---
COLUMN_UNIT = "column"

# Finest to coarsest; rounding at one unit resets every unit before it.
TIME_UNITS = (
    "millisecond",
    "second",
    "minute",
    "hour",
    "day",
    "week",
    "month",
    "year",
)

# Fixed-length units, in milliseconds.
UNIT_MILLISECONDS = {
    "millisecond": 1.0,
    "second": 1000.0,
    "minute": 60_000.0,
    "hour": 3_600_000.0,
    "day": 86_400_000.0,
    "week": 604_800_000.0,
}

MIDPOINTS = (None, "up", "down")
