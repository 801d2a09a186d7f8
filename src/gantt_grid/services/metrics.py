"""Centralized metrics calculation for column partitions.

Pure functions deriving summary figures from a column's time frames, shared
by the rendering layer (e.g. to flag a nearly fully cropped column) and the
tabular export.
"""

from typing import Sequence

from gantt_grid.core.column import Column
from gantt_grid.schemas import TimeFrame


def calculate_kept_width(frames: Sequence[TimeFrame]) -> float:
    """Total pixel width of the frames that are not cropped."""
    return sum(f.width for f in frames if not f.cropped)


def calculate_cropped_fraction(column: Column) -> float:
    """Share (0.0 to 1.0) of the column's time collapsed by cropping."""
    if not column.time_frames or column.duration <= 0:
        return 0.0
    cropped = sum(f.duration for f in column.time_frames if f.cropped)
    return cropped / column.duration


def calculate_working_share(column: Column) -> float:
    """Share (0.0 to 1.0) of the column's time classified as working."""
    if not column.time_frames or column.duration <= 0:
        return 0.0
    working = sum(f.duration for f in column.time_frames if f.working)
    return working / column.duration


def is_mostly_cropped(column: Column, threshold: float = 0.99) -> bool:
    """True when at least `threshold` of the column's time is cropped.

    Unlike `column.cropped` (every frame cropped), this also flags columns
    that keep only a sliver of time.
    """
    return column.cropped or calculate_cropped_fraction(column) >= threshold
