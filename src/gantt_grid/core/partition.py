"""Partition building for a column.

Turns calendar output into the column's time frame partition in three
stages, each returning new `TimeFrame` records:

1. COLLECT: walk the column day by day (`iter_days`), fetch the day's raw
   frames, let the calendar resolve them against the exact sub-range, then
   default missing boundaries and clamp them into the column span.
2. PLACE: linear interpolation of every frame onto the column's pixel axis:
       left  = (frame.start - column.start) / duration * width
       width = frame.duration / duration * width
   and resolution of `hidden` from the display modes.
3. CROP: when a classification is displayed as cropped, its frames collapse
   to zero width and the remaining frames are scaled by
       ratio = column.width / kept_width
   in a single left-to-right pass, preserving their order and adjacency.
"""

import logging
from datetime import date, datetime
from typing import Iterator, Sequence

from gantt_grid.core.calendar import Calendar
from gantt_grid.core.constants import EPSILON, ONE_DAY
from gantt_grid.schemas import DisplayMode, Partition, Placement, TimeFrame

logger = logging.getLogger(__name__)


def start_of_day(instant: datetime) -> datetime:
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def day_key(instant: datetime) -> date:
    """Key of the calendar day (year, month, day-of-month) holding `instant`."""
    return instant.date()


def milliseconds_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() * 1000.0


def iter_days(start: datetime, end: datetime) -> Iterator[tuple[datetime, datetime]]:
    """Yield `(day_start, day_end)` pairs covering `[start, end]`.

    The first pair starts at `start` and every pair ends at the next midnight,
    or at `end` for the last one.  Nothing is yielded when `end <= start`.
    """
    cursor = start
    while cursor < end:
        day_end = min(start_of_day(cursor) + ONE_DAY, end)
        yield cursor, day_end
        cursor = day_end


def is_hidden(
    frame: TimeFrame, working_mode: DisplayMode, non_working_mode: DisplayMode
) -> bool:
    """A frame is shown only when its classification's mode is VISIBLE."""
    mode = working_mode if frame.working else non_working_mode
    return mode != DisplayMode.VISIBLE


def is_kept(
    frame: TimeFrame, working_mode: DisplayMode, non_working_mode: DisplayMode
) -> bool:
    """A frame keeps its pixel footprint unless its classification is CROPPED."""
    mode = working_mode if frame.working else non_working_mode
    return mode != DisplayMode.CROPPED


def clip_day_frames(
    frames: Sequence[TimeFrame],
    day_start: datetime,
    day_end: datetime,
    column_start: datetime,
    column_end: datetime,
) -> list[TimeFrame]:
    """Fill missing boundaries with the day edges and clamp into the column."""
    clipped = []
    for frame in frames:
        start = day_start if frame.start is None else frame.start
        end = day_end if frame.end is None else frame.end
        start = max(start, column_start)
        end = min(end, column_end)
        clipped.append(frame.model_copy(update={"start": start, "end": end}))
    return clipped


def _tiles(frames: Sequence[TimeFrame], start: datetime, end: datetime) -> bool:
    if not frames:
        return start == end
    if frames[0].start != start or frames[-1].end != end:
        return False
    return all(a.end == b.start for a, b in zip(frames, frames[1:]))


def collect_time_frames(
    calendar: Calendar, start: datetime, end: datetime
) -> tuple[list[TimeFrame], dict[date, tuple[int, int]]]:
    """Build the raw partition of `[start, end]` from calendar data.

    Returns:
        Tuple of (frames, day_slices):
            ``frames``: clipped frames in chronological order.
            ``day_slices``: {day: (first_index, stop_index)} into ``frames``.
    """
    frames: list[TimeFrame] = []
    day_slices: dict[date, tuple[int, int]] = {}
    for day_start, day_end in iter_days(start, end):
        raw = calendar.get_frames(day_start)
        resolved = calendar.resolve(raw, day_start, day_end)
        day_frames = clip_day_frames(resolved, day_start, day_end, start, end)
        if not _tiles(day_frames, day_start, day_end):
            logger.warning(
                f"Calendar frames do not tile {day_start.isoformat()} - "
                f"{day_end.isoformat()}"
            )
        day_slices[day_key(day_start)] = (len(frames), len(frames) + len(day_frames))
        frames.extend(day_frames)
    logger.debug(f"Collected {len(frames)} time frames over {len(day_slices)} day(s)")
    return frames, day_slices


def place_frames(
    frames: Sequence[TimeFrame],
    column_start: datetime,
    duration: float,
    width: float,
    working_mode: DisplayMode,
    non_working_mode: DisplayMode,
) -> list[TimeFrame]:
    """Interpolate frames onto the column's pixel axis.

    Args:
        frames: Frames with resolved boundaries.
        column_start: Start instant of the column.
        duration: Column duration in milliseconds (must be positive).
        width: Column width in pixels.
        working_mode: Display mode of working frames.
        non_working_mode: Display mode of non-working frames.

    Returns:
        New frames with `left`, `width`, `hidden` and `original_placement` set.

    Raises:
        ValueError: If `duration` is not positive.
    """
    if duration <= 0:
        raise ValueError("Cannot place time frames in a column of zero duration")

    placed = []
    for frame in frames:
        left = milliseconds_between(column_start, frame.start) / duration * width
        frame_width = frame.duration / duration * width
        placed.append(
            frame.model_copy(
                update={
                    "left": left,
                    "width": frame_width,
                    "hidden": is_hidden(frame, working_mode, non_working_mode),
                    "cropped": False,
                    "original_placement": Placement(left=left, width=frame_width),
                }
            )
        )
    return placed


def crop_frames(
    frames: Sequence[TimeFrame],
    width: float,
    working_mode: DisplayMode,
    non_working_mode: DisplayMode,
) -> tuple[list[TimeFrame], bool]:
    """Collapse cropped frames and redistribute their width.

    Args:
        frames: Placed frames, in chronological order.
        width: Column width the kept frames must fill.
        working_mode: Display mode of working frames.
        non_working_mode: Display mode of non-working frames.

    Returns:
        Tuple of (frames, all_cropped):
            ``frames``: new frames; unchanged when the kept frames already
                fill the column.
            ``all_cropped``: True only if every frame was dropped.

    Raises:
        ValueError: If there are no frames to redistribute, or the kept
            frames have no width to stretch.
    """
    if not frames:
        raise ValueError("Cannot crop an empty time frame partition")

    kept = [f for f in frames if is_kept(f, working_mode, non_working_mode)]
    kept_width = sum(f.width for f in kept)
    if abs(kept_width - width) <= EPSILON:
        return list(frames), False
    if kept and kept_width <= EPSILON:
        raise ValueError(
            f"Cannot stretch {len(kept)} kept time frame(s) of zero width "
            f"over {width}px"
        )

    # Every frame is dropped when nothing is kept.
    ratio = width / kept_width if kept else 0.0
    logger.debug(f"Cropping time frames: kept width {kept_width:.3f}, ratio {ratio:.4f}")

    cropped_width = 0.0
    original_cropped_width = 0.0
    all_cropped = True
    result = []
    for frame in frames:
        if is_kept(frame, working_mode, non_working_mode):
            original = frame.original_placement
            result.append(
                frame.model_copy(
                    update={
                        "left": (frame.left - cropped_width) * ratio,
                        "width": frame.width * ratio,
                        "original_placement": Placement(
                            left=(original.left - original_cropped_width) * ratio,
                            width=original.width * ratio,
                        ),
                        "cropped": False,
                    }
                )
            )
            all_cropped = False
        else:
            cropped_width += frame.width
            original_cropped_width += frame.original_placement.width
            result.append(
                frame.model_copy(
                    update={
                        "left": None,
                        "width": 0.0,
                        "original_placement": Placement(left=None, width=0.0),
                        "cropped": True,
                    }
                )
            )
    return result, all_cropped


def build_partition(
    calendar: Calendar,
    start: datetime,
    end: datetime,
    width: float,
    working_mode: DisplayMode,
    non_working_mode: DisplayMode,
) -> Partition:
    """Run collect, place and crop for one column span.

    Raises:
        ValueError: If the span has no duration.
    """
    duration = milliseconds_between(start, end)
    if duration <= 0:
        raise ValueError(
            f"Cannot build time frames for a zero-length column at {start.isoformat()}"
        )

    frames, day_slices = collect_time_frames(calendar, start, end)
    frames = place_frames(frames, start, duration, width, working_mode, non_working_mode)

    cropped = False
    if DisplayMode.CROPPED in (working_mode, non_working_mode):
        frames, cropped = crop_frames(frames, width, working_mode, non_working_mode)
        if cropped:
            logger.warning(f"Every time frame of column {start.isoformat()} is cropped")

    frames_tuple = tuple(frames)
    return Partition(
        time_frames=frames_tuple,
        visible_time_frames=tuple(f for f in frames_tuple if not f.hidden),
        day_index={key: frames_tuple[lo:hi] for key, (lo, hi) in day_slices.items()},
        cropped=cropped,
    )
