"""Time-axis column geometry for Gantt-style scheduling grids."""

from gantt_grid.core.calendar import Calendar, DailyCalendar, resolve_frames
from gantt_grid.core.column import Column
from gantt_grid.core.snapping import round_to
from gantt_grid.schemas import (
    DisplayMode,
    GridConfig,
    MagnetConfig,
    Placement,
    TimeFrame,
    TimeFrameRule,
)

__all__ = [
    "Calendar",
    "Column",
    "DailyCalendar",
    "DisplayMode",
    "GridConfig",
    "MagnetConfig",
    "Placement",
    "TimeFrame",
    "TimeFrameRule",
    "resolve_frames",
    "round_to",
]
