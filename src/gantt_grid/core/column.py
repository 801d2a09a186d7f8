"""Grid column: one vertical slice of the time axis.

A column maps its span `[start, end]` onto the pixel range
`[left, left + width]` and answers position <-> instant queries.  When a
calendar is attached, the span is partitioned into time frames; frames of a
classification displayed as "cropped" collapse to zero width and the other
frames stretch to fill the column, so every mapping goes through the frames
while cropping is active.
"""

import logging
from datetime import date, datetime, timedelta
from types import MappingProxyType
from typing import Mapping

from gantt_grid.core.calendar import Calendar
from gantt_grid.core.constants import COLUMN_UNIT
from gantt_grid.core.partition import build_partition, day_key, milliseconds_between
from gantt_grid.core.snapping import round_to, snap_to_time_frames
from gantt_grid.schemas import DisplayMode, Partition, Placement, TimeFrame
from gantt_grid.schemas.defaults import DEFAULT_NON_WORKING_MODE, DEFAULT_WORKING_MODE

logger = logging.getLogger(__name__)


class Column:
    """A column of the Gantt grid.

    Attributes:
        start: First instant of the column (exclusive for containment).
        end: Last instant of the column (inclusive for containment).
        left: Left offset on the shared pixel axis.
        width: Width in pixels.
        duration: `end - start` in milliseconds.
        calendar: Optional time frame calendar.
        working_mode: Display mode of working time frames.
        non_working_mode: Display mode of non-working time frames.
        original_placement: Placement snapshot taken at construction.
        current_date: Set by the rendering layer when the column holds "now".
        cropped: True when every time frame of the column is cropped.
    """

    def __init__(
        self,
        start: datetime,
        end: datetime,
        left: float,
        width: float,
        calendar: Calendar | None = None,
        working_mode: DisplayMode | str | None = None,
        non_working_mode: DisplayMode | str | None = None,
    ) -> None:
        if end < start:
            raise ValueError(
                f"Column end {end.isoformat()} is before start {start.isoformat()}"
            )
        if width < 0:
            raise ValueError(f"Column width must be >= 0, got {width}")

        self.start = start
        self.end = end
        self.left = left
        self.width = width
        self.duration: float = milliseconds_between(start, end)
        self.calendar = calendar
        self.working_mode = DisplayMode(working_mode or DEFAULT_WORKING_MODE)
        self.non_working_mode = DisplayMode(
            non_working_mode or DEFAULT_NON_WORKING_MODE
        )
        self.original_placement = Placement(left=left, width=width)
        self.current_date = False
        self.cropped = False
        self.partition = Partition()
        self.update_time_frames()

    def __repr__(self) -> str:
        return (
            f"Column({self.start.isoformat()} -> {self.end.isoformat()}, "
            f"left={self.left}, width={self.width})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Column):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash(self.start)

    # ------------------------------------------------------------------
    # Partition
    # ------------------------------------------------------------------

    @property
    def time_frames(self) -> tuple[TimeFrame, ...]:
        return self.partition.time_frames

    @property
    def visible_time_frames(self) -> tuple[TimeFrame, ...]:
        return self.partition.visible_time_frames

    @property
    def day_index(self) -> Mapping[date, tuple[TimeFrame, ...]]:
        """Read-only view of the frames of each calendar day."""
        return MappingProxyType(self.partition.day_index)

    @property
    def cropping_active(self) -> bool:
        return DisplayMode.CROPPED in (self.working_mode, self.non_working_mode)

    def update_time_frames(self) -> None:
        """Rebuild the time frame partition from the calendar.

        The previous partition is discarded.  Nothing is built without a
        calendar or when both classifications are hidden.

        Raises:
            ValueError: If the column has zero duration.
        """
        if self.calendar is None or (
            self.working_mode == DisplayMode.HIDDEN
            and self.non_working_mode == DisplayMode.HIDDEN
        ):
            self.partition = Partition()
            self.cropped = False
            return

        self.partition = build_partition(
            self.calendar,
            self.start,
            self.end,
            self.width,
            self.working_mode,
            self.non_working_mode,
        )
        self.cropped = self.partition.cropped
        logger.debug(
            f"{self!r}: {len(self.time_frames)} time frames, "
            f"{len(self.visible_time_frames)} visible, cropped={self.cropped}"
        )

    def get_day_time_frames(self, instant: datetime) -> tuple[TimeFrame, ...]:
        """Frames of the calendar day holding `instant` (empty on a miss)."""
        return self.day_index.get(day_key(instant), ())

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def clone(self) -> "Column":
        """Copy of this column with a freshly built partition."""
        return Column(
            self.start,
            self.end,
            self.left,
            self.width,
            self.calendar,
            self.working_mode,
            self.non_working_mode,
        )

    def contains_instant(self, instant: datetime) -> bool:
        """True iff `start < instant <= end`."""
        return self.start < instant <= self.end

    def equals(self, other: "Column") -> bool:
        """Columns are identified by their start instant alone."""
        return self.start == other.start

    # ------------------------------------------------------------------
    # Position <-> instant
    # ------------------------------------------------------------------

    def date_from_position_using_time_frames(self, position: float) -> datetime | None:
        """Interpolate within the first kept frame containing `position`.

        Args:
            position: Pixel offset relative to the column's left edge.

        Returns:
            The instant, or None if no kept frame contains the position.
        """
        for frame in self.time_frames:
            if frame.cropped or frame.left is None:
                continue
            if frame.left <= position <= frame.left + frame.width:
                if frame.width == 0:
                    return frame.start
                offset = frame.duration / frame.width * (position - frame.left)
                return frame.start + timedelta(milliseconds=offset)
        return None

    def date_from_position(
        self,
        position: float,
        magnet_value: float | None = None,
        magnet_unit: str | None = None,
        time_frames_magnet: bool = False,
        midpoint: str | None = None,
    ) -> datetime:
        """Instant represented by a pixel offset inside the column.

        Out-of-range positions are clamped to the column edges.

        Args:
            position: Pixel offset relative to the column's left edge.
            magnet_value: Snap amount; absent or <= 0 disables snapping.
            magnet_unit: Snap unit (see `round_to`) or "column".
            time_frames_magnet: Also snap to working transitions.
            midpoint: Rounding policy for unit snapping.

        Returns:
            The (possibly snapped) instant.
        """
        position = min(max(position, 0.0), self.width)

        instant = None
        if self.cropping_active:
            instant = self.date_from_position_using_time_frames(position)

        if instant is None:
            if self.width == 0:
                instant = self.start
            else:
                offset = self.duration * (position / self.width)
                instant = self.start + timedelta(milliseconds=offset)

        return self.magnet_date(
            instant, magnet_value, magnet_unit, time_frames_magnet, midpoint
        )

    def position_from_date(self, instant: datetime) -> float:
        """Pixel position of `instant` on the shared axis (includes `left`).

        While cropping is active, an instant inside a cropped frame resolves
        to the start of the next kept time.
        """
        cropped_date = instant

        if self.cropping_active:
            day = day_key(cropped_date)
            frames = self.get_day_time_frames(cropped_date)
            i = 0
            while i < len(frames):
                frame = frames[i]
                if frame.start <= cropped_date <= frame.end:
                    if not frame.cropped:
                        offset = 0.0
                        if frame.duration > 0:
                            elapsed = milliseconds_between(frame.start, cropped_date)
                            offset = elapsed / frame.duration * frame.width
                        return self.left + frame.left + offset
                    if i + 1 < len(frames):
                        cropped_date = frames[i + 1].start
                    else:
                        cropped_date = frame.end
                        if day_key(cropped_date) != day:
                            # continue with the first frames of the next day
                            day = day_key(cropped_date)
                            frames = self.get_day_time_frames(cropped_date)
                            i = 0
                            continue
                i += 1

        position = 0.0
        if self.duration > 0:
            elapsed = milliseconds_between(self.start, cropped_date)
            position = elapsed / self.duration * self.width
        position = min(max(position, 0.0), self.width)
        return self.left + position

    # ------------------------------------------------------------------
    # Snapping
    # ------------------------------------------------------------------

    def magnet_date(
        self,
        instant: datetime,
        magnet_value: float | None = None,
        magnet_unit: str | None = None,
        time_frames_magnet: bool = False,
        midpoint: str | None = None,
    ) -> datetime:
        """Snap `instant` to a unit grid and/or time frame transitions.

        - "column" unit: the nearer column edge by pixel position; an instant
          exactly at mid-width snaps to `end`.
        - Other units: `round_to`, then clamped into `[start, end]`.
        - With `time_frames_magnet`, a transition boundary strictly closer to
          the unsnapped instant replaces the rounded result.

        Returns:
            `instant` unchanged when `magnet_value` is absent or <= 0 or no
            unit is given.
        """
        if magnet_value is None or magnet_value <= 0 or magnet_unit is None:
            return instant

        initial = instant
        if magnet_unit == COLUMN_UNIT:
            position = self.position_from_date(instant) - self.left
            snapped = self.start if position < self.width / 2 else self.end
        else:
            snapped = round_to(instant, magnet_unit, magnet_value, midpoint)
            snapped = min(max(snapped, self.start), self.end)

        if time_frames_magnet:
            snapped = snap_to_time_frames(self.time_frames, initial, snapped)
        return snapped
