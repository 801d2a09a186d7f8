"""Snapping ("magnet") helpers.

Two independent refinements of a candidate instant:

- UNIT ROUNDING: `round_to` moves the instant to a multiple of `amount` at
  one calendar unit and resets every finer unit (rounding to the hour also
  zeroes minutes, seconds and milliseconds).
- FRAME BOUNDARIES: `snap_to_time_frames` adopts the nearest boundary where
  the working classification changes, but only when it is strictly closer
  to the original candidate than the unit-rounded result.
"""

import math
from datetime import datetime, timedelta
from typing import Iterator, Sequence

from gantt_grid.core.constants import MIDPOINTS, TIME_UNITS, UNIT_MILLISECONDS
from gantt_grid.schemas import TimeFrame


def truncate(instant: datetime, unit: str) -> datetime:
    """Reset every component finer than `unit`."""
    if unit == "millisecond":
        return instant.replace(microsecond=instant.microsecond // 1000 * 1000)
    if unit == "second":
        return instant.replace(microsecond=0)
    if unit == "minute":
        return instant.replace(second=0, microsecond=0)
    if unit == "hour":
        return instant.replace(minute=0, second=0, microsecond=0)

    day = instant.replace(hour=0, minute=0, second=0, microsecond=0)
    if unit == "day":
        return day
    if unit == "week":
        return day - timedelta(days=day.weekday())
    if unit == "month":
        return day.replace(day=1)
    if unit == "year":
        return day.replace(month=1, day=1)
    raise ValueError(f"Unknown time unit: {unit!r}")


def _component(instant: datetime, unit: str) -> int:
    if unit == "millisecond":
        return instant.microsecond // 1000
    if unit == "week":
        return instant.isocalendar()[1]
    if unit == "month":
        # zero-based so that multiples (quarters, halves) start in January
        return instant.month - 1
    return getattr(instant, unit)


def add_months(instant: datetime, months: int) -> datetime:
    """Shift `instant` by whole calendar months (day-of-month must exist)."""
    year, month0 = divmod(instant.year * 12 + instant.month - 1 + months, 12)
    return instant.replace(year=year, month=month0 + 1)


def _round(value: float, midpoint: str | None) -> int:
    if midpoint == "up":
        return math.ceil(value)
    if midpoint == "down":
        return math.floor(value)
    # half-up, not Python's banker's rounding
    return math.floor(value + 0.5)


def round_to(
    instant: datetime, unit: str, amount: float = 1, midpoint: str | None = None
) -> datetime:
    """Round `instant` to a multiple of `amount` at `unit`.

    Only the component at `unit` is rounded; finer units are dropped, so
    13:37 gives 13:00 at the hour and 14:00 with an amount of 2.

    Args:
        instant: The instant to round.
        unit: One of TIME_UNITS.
        amount: Step at `unit` (e.g. 15 for quarter hours).  Falsy means 1.
        midpoint: None (nearest, halves up), "up" (ceil) or "down" (floor).

    Returns:
        The rounded instant, with every finer unit reset.

    Raises:
        ValueError: If `unit` or `midpoint` is unknown.
    """
    if unit not in TIME_UNITS:
        raise ValueError(f"Unknown time unit: {unit!r}")
    if midpoint not in MIDPOINTS:
        raise ValueError(f"Unknown midpoint: {midpoint!r}")
    amount = amount or 1

    base = truncate(instant, unit)
    value = _component(instant, unit)
    target = _round(value / amount, midpoint) * amount

    if unit in UNIT_MILLISECONDS:
        length = timedelta(milliseconds=UNIT_MILLISECONDS[unit])
        return base + (target - value) * length
    if unit == "year":
        year = min(max(int(target), datetime.min.year), datetime.max.year)
        return base.replace(year=year)
    return add_months(base, int(target - value))


def transition_boundaries(frames: Sequence[TimeFrame]) -> Iterator[datetime]:
    """Yield boundaries of magnet frames where the classification changes.

    A frame's start counts when there is no previous frame or the previous
    one differs in `working`; its end counts likewise against the next frame.
    """
    for i, frame in enumerate(frames):
        if not frame.magnet:
            continue
        previous = frames[i - 1] if i > 0 else None
        following = frames[i + 1] if i + 1 < len(frames) else None
        if previous is None or previous.working != frame.working:
            yield frame.start
        if following is None or following.working != frame.working:
            yield frame.end


def snap_to_time_frames(
    frames: Sequence[TimeFrame], initial: datetime, snapped: datetime
) -> datetime:
    """Return the nearest transition boundary if strictly closer than `snapped`.

    Distances are measured from `initial`, the candidate before rounding.
    Ties keep `snapped`.
    """
    best = snapped
    best_diff = abs(initial - snapped)
    for boundary in transition_boundaries(frames):
        diff = abs(initial - boundary)
        if diff < best_diff:
            best, best_diff = boundary, diff
    return best
