"""Configuration schemas for the Gantt grid."""

from datetime import time
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from gantt_grid.schemas.defaults import (
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_FILL_WORKING,
    DEFAULT_GRID_UNIT,
    DEFAULT_MAGNET_MIDPOINT,
    DEFAULT_MAGNET_UNIT,
    DEFAULT_MAGNET_VALUE,
    DEFAULT_NON_WORKING_MODE,
    DEFAULT_TIME_FRAME_MAGNET,
    DEFAULT_TIME_FRAME_PRIORITY,
    DEFAULT_TIME_FRAMES_MAGNET,
    DEFAULT_WORKING_MODE,
)

MagnetUnit = Literal[
    "millisecond", "second", "minute", "hour", "day", "week", "month", "year", "column"
]
ColumnUnit = Literal["hour", "day", "week", "month"]
Midpoint = Literal["up", "down"]


class DisplayMode(str, Enum):
    """How time frames of one classification are displayed.

    - HIDDEN: frames are not rendered; no geometry change.
    - VISIBLE: frames are rendered at their natural width.
    - CROPPED: frames collapse to zero width and the reclaimed width is
      redistributed among the remaining frames.
    """

    HIDDEN = "hidden"
    VISIBLE = "visible"
    CROPPED = "cropped"


class MagnetConfig(BaseModel):
    """Snapping applied when converting a pixel position to an instant.

    A `value` of 0 (or no `unit`) disables unit snapping.  The special unit
    "column" ignores `value` and snaps to the nearer column edge.
    """

    value: float = Field(
        DEFAULT_MAGNET_VALUE,
        ge=0,
        description="Snap amount in `unit` (e.g. 15 with unit='minute')",
    )
    unit: MagnetUnit | None = Field(DEFAULT_MAGNET_UNIT, description="Snap unit")
    midpoint: Midpoint | None = Field(
        DEFAULT_MAGNET_MIDPOINT,
        description="Rounding policy: None=nearest, 'up'=ceil, 'down'=floor",
    )
    time_frames: bool = Field(
        DEFAULT_TIME_FRAMES_MAGNET,
        description="Also snap to working/non-working transitions",
    )

    model_config = ConfigDict(frozen=True)

    @property
    def enabled(self) -> bool:
        return self.value > 0 and self.unit is not None


class TimeFrameRule(BaseModel):
    """A time-of-day window the reference calendar stamps onto every day.

    `start`/`end` of None mean the start/end of the day.  `weekdays` limits
    the rule to some days of the week (0 = Monday); None applies it daily.
    """

    name: str | None = None
    start: time | None = Field(None, description="Window start (time of day)")
    end: time | None = Field(None, description="Window end (time of day)")
    working: bool = Field(..., description="Working/non-working classification")
    magnet: bool = DEFAULT_TIME_FRAME_MAGNET
    priority: int = Field(DEFAULT_TIME_FRAME_PRIORITY, description="Higher wins")
    color: str | None = None
    classes: tuple[str, ...] = ()
    weekdays: tuple[int, ...] | None = Field(
        None, description="Days of the week the rule applies to (0 = Monday)"
    )

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_window(self) -> "TimeFrameRule":
        if self.start is not None and self.end is not None and self.end <= self.start:
            raise ValueError("end must be later than start within the same day")
        if self.weekdays is not None and any(d < 0 or d > 6 for d in self.weekdays):
            raise ValueError("weekdays must be in 0..6")
        return self


class GridConfig(BaseModel):
    """Root configuration for a grid layout pass."""

    name: str = "Grid"
    description: str = ""
    unit: ColumnUnit = Field(DEFAULT_GRID_UNIT, description="Span of one column")
    column_width: float = Field(
        DEFAULT_COLUMN_WIDTH, gt=0, description="Width of one column (px)"
    )
    working_mode: DisplayMode = Field(
        DisplayMode(DEFAULT_WORKING_MODE),
        description="Display mode of working time frames",
    )
    non_working_mode: DisplayMode = Field(
        DisplayMode(DEFAULT_NON_WORKING_MODE),
        description="Display mode of non-working time frames",
    )
    magnet: MagnetConfig = Field(default_factory=MagnetConfig)
    time_frames: tuple[TimeFrameRule, ...] = Field(
        (), description="Daily time frame rules for the reference calendar"
    )
    default_working: bool = Field(
        DEFAULT_FILL_WORKING,
        description="Classification of the time not covered by any rule",
    )

    model_config = ConfigDict(frozen=True)
