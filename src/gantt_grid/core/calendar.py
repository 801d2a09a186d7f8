"""Calendar capability consumed by columns.

A column never decides which time frames exist on a day; it asks a calendar.
Any object with `get_frames` and `resolve` satisfies the `Calendar` protocol.

`DailyCalendar` is a small reference implementation: it stamps
the same time-of-day rules onto every day (optionally filtered by weekday)
and resolves overlaps by priority, filling uncovered time with a default
frame so the resolved frames tile the requested range.
"""

import logging
from datetime import datetime
from typing import Iterable, Protocol, Sequence

from gantt_grid.schemas import GridConfig, TimeFrame, TimeFrameRule
from gantt_grid.schemas.defaults import DEFAULT_FILL_WORKING

logger = logging.getLogger(__name__)


class Calendar(Protocol):
    """Protocol for a time frame calendar."""

    def get_frames(self, instant: datetime) -> Sequence[TimeFrame]:
        """Return the raw time frames applicable to the day of `instant`.

        Args:
            instant: Any instant within the requested day.

        Returns:
            Unclipped frames; boundaries may be None (meaning the day edges).
        """
        ...

    def resolve(
        self, frames: Sequence[TimeFrame], range_start: datetime, range_end: datetime
    ) -> Sequence[TimeFrame]:
        """Resolve `frames` so that they exactly cover `[range_start, range_end]`.

        Args:
            frames: Raw frames, usually from `get_frames`.
            range_start: Start of the sub-range to cover.
            range_end: End of the sub-range to cover.

        Returns:
            Ordered, non-overlapping frames tiling the sub-range.
        """
        ...


def resolve_frames(
    frames: Iterable[TimeFrame],
    range_start: datetime,
    range_end: datetime,
    default_working: bool = DEFAULT_FILL_WORKING,
) -> list[TimeFrame]:
    """Resolve overlapping frames over a range by precedence.

    Frames are painted in order of precedence (higher `priority` first, then
    longer frames first); each frame only claims time that no frame before it
    claimed.  Time left unclaimed is covered by default frames classified as
    `default_working`.

    Args:
        frames: Raw frames; None boundaries stand for the range edges.
        range_start: Start of the range.
        range_end: End of the range.
        default_working: Classification of gap-filling frames.

    Returns:
        Frames ordered by start, clipped to and tiling the range.  Empty when
        the range has no length.
    """
    if range_end <= range_start:
        return []

    candidates = []
    for frame in frames:
        start = range_start if frame.start is None else frame.start
        end = range_end if frame.end is None else frame.end
        if end <= range_start or start >= range_end or end <= start:
            continue
        candidates.append(frame.model_copy(update={"start": start, "end": end}))

    # sorted() is stable, so equal frames keep calendar order
    ordered = sorted(candidates, key=lambda f: (-f.priority, -f.duration))

    segments: list[tuple[datetime, datetime, TimeFrame | None]] = [
        (range_start, range_end, None)
    ]
    for frame in ordered:
        painted = []
        for seg_start, seg_end, owner in segments:
            if owner is not None or frame.end <= seg_start or frame.start >= seg_end:
                painted.append((seg_start, seg_end, owner))
                continue
            lo = max(seg_start, frame.start)
            hi = min(seg_end, frame.end)
            if seg_start < lo:
                painted.append((seg_start, lo, None))
            painted.append((lo, hi, frame))
            if hi < seg_end:
                painted.append((hi, seg_end, None))
        segments = painted

    resolved = []
    for seg_start, seg_end, owner in segments:
        if owner is None:
            resolved.append(
                TimeFrame(start=seg_start, end=seg_end, working=default_working)
            )
        else:
            resolved.append(owner.model_copy(update={"start": seg_start, "end": seg_end}))
    return resolved


class DailyCalendar:
    """Calendar applying the same time-of-day rules to every day.

    Attributes:
        rules: Time frame rules, in registration order.
        default_working: Classification of time no rule covers.
    """

    def __init__(
        self,
        rules: Iterable[TimeFrameRule] = (),
        default_working: bool = DEFAULT_FILL_WORKING,
    ) -> None:
        self.rules: list[TimeFrameRule] = list(rules)
        self.default_working = default_working

    @classmethod
    def from_config(cls, config: GridConfig) -> "DailyCalendar":
        """Build a calendar from the rules of a grid configuration."""
        return cls(config.time_frames, default_working=config.default_working)

    def register(self, *rules: TimeFrameRule) -> None:
        self.rules.extend(rules)

    def get_frames(self, instant: datetime) -> list[TimeFrame]:
        day = instant.date()
        weekday = day.weekday()
        frames = []
        for rule in self.rules:
            if rule.weekdays is not None and weekday not in rule.weekdays:
                continue
            frames.append(
                TimeFrame(
                    start=None
                    if rule.start is None
                    else datetime.combine(day, rule.start, tzinfo=instant.tzinfo),
                    end=None
                    if rule.end is None
                    else datetime.combine(day, rule.end, tzinfo=instant.tzinfo),
                    working=rule.working,
                    magnet=rule.magnet,
                    name=rule.name,
                    priority=rule.priority,
                    color=rule.color,
                    classes=rule.classes,
                )
            )
        logger.debug(f"{len(frames)} time frame rules apply to {day}")
        return frames

    def resolve(
        self, frames: Sequence[TimeFrame], range_start: datetime, range_end: datetime
    ) -> list[TimeFrame]:
        return resolve_frames(
            frames, range_start, range_end, default_working=self.default_working
        )
