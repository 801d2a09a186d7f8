"""Grid layout - builds the row of columns for a date range.

Columns are laid out left to right, one per `unit`, each `column_width`
pixels wide.  Grid-level conversions locate the owning column first and
delegate to it.
"""

import bisect
import logging
from datetime import datetime, timedelta
from typing import Sequence

from gantt_grid.core.calendar import Calendar, DailyCalendar
from gantt_grid.core.column import Column
from gantt_grid.core.snapping import add_months, truncate
from gantt_grid.schemas import DisplayMode, GridConfig, MagnetConfig

logger = logging.getLogger(__name__)

COLUMN_STEPS = {
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
}


def next_column_start(instant: datetime, unit: str) -> datetime:
    if unit == "month":
        return add_months(instant, 1)
    try:
        return instant + COLUMN_STEPS[unit]
    except KeyError:
        raise ValueError(f"Unsupported column unit: {unit!r}") from None


def generate_columns(
    from_date: datetime,
    to_date: datetime,
    unit: str,
    column_width: float,
    calendar: Calendar | None = None,
    working_mode: DisplayMode | str | None = None,
    non_working_mode: DisplayMode | str | None = None,
    left: float = 0.0,
) -> list[Column]:
    """Generate consecutive columns covering `[from_date, to_date]`.

    The first column starts at `from_date` truncated to `unit`; the last one
    is the first to reach `to_date`.

    Args:
        from_date: First instant to display.
        to_date: Last instant to display.
        unit: Span of one column ("hour", "day", "week" or "month").
        column_width: Width of every column in pixels.
        calendar: Optional time frame calendar shared by all columns.
        working_mode: Display mode of working time frames.
        non_working_mode: Display mode of non-working time frames.
        left: Left offset of the first column.

    Returns:
        Columns ordered by start.
    """
    if to_date < from_date:
        raise ValueError("to_date must not be before from_date")

    columns = []
    cursor = truncate(from_date, unit)
    while True:
        following = next_column_start(cursor, unit)
        columns.append(
            Column(
                cursor,
                following,
                left,
                column_width,
                calendar,
                working_mode,
                non_working_mode,
            )
        )
        left += column_width
        cursor = following
        if cursor >= to_date:
            break

    logger.debug(f"Generated {len(columns)} {unit} column(s) from {from_date}")
    return columns


def columns_from_config(
    config: GridConfig,
    from_date: datetime,
    to_date: datetime,
    calendar: Calendar | None = None,
) -> list[Column]:
    """Generate columns from a grid configuration.

    Without an explicit calendar, a `DailyCalendar` is built from the
    configuration's time frame rules (if it has any).
    """
    if calendar is None and config.time_frames:
        calendar = DailyCalendar.from_config(config)
    return generate_columns(
        from_date,
        to_date,
        config.unit,
        config.column_width,
        calendar,
        config.working_mode,
        config.non_working_mode,
    )


def find_column(columns: Sequence[Column], instant: datetime) -> Column | None:
    """Column containing `instant` (`start < instant <= end`).

    Instants before the grid map to the first column, after it to the last.
    """
    if not columns:
        return None
    index = bisect.bisect_left(columns, instant, key=lambda column: column.end)
    if index >= len(columns):
        return columns[-1]
    return columns[index]


def find_column_by_position(
    columns: Sequence[Column], position: float
) -> Column | None:
    """Column whose pixel range holds `position` (clamped to the grid)."""
    if not columns:
        return None
    index = bisect.bisect_left(
        columns, position, key=lambda column: column.left + column.width
    )
    if index >= len(columns):
        return columns[-1]
    return columns[index]


def position_from_date(columns: Sequence[Column], instant: datetime) -> float | None:
    column = find_column(columns, instant)
    if column is None:
        return None
    return column.position_from_date(instant)


def date_from_position(
    columns: Sequence[Column],
    position: float,
    magnet: MagnetConfig | None = None,
) -> datetime | None:
    """Instant at an absolute pixel position of the grid.

    Args:
        columns: Grid columns ordered by start.
        position: Absolute pixel position on the shared axis.
        magnet: Optional snapping configuration.

    Returns:
        The instant, or None for an empty grid.
    """
    column = find_column_by_position(columns, position)
    if column is None:
        return None
    magnet = magnet or MagnetConfig()
    return column.date_from_position(
        position - column.left,
        magnet.value,
        magnet.unit,
        magnet.time_frames,
        magnet.midpoint,
    )
