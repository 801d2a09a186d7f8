"""Shared test fixtures."""

from typing import Callable

import pytest

from gantt_grid.core.calendar import DailyCalendar
from gantt_grid.core.column import Column
from gantt_grid.schemas import DisplayMode, TimeFrame

from .factories import create_calendar, create_column, create_time_frame


@pytest.fixture
def time_frame_factory() -> Callable[..., TimeFrame]:
    """Fixture that returns the time frame factory function."""
    return create_time_frame


@pytest.fixture
def column_factory() -> Callable[..., Column]:
    """Fixture that returns the column factory function."""
    return create_column


@pytest.fixture
def break_calendar() -> DailyCalendar:
    """Working day with a non-working 08:00-08:30 break."""
    return create_calendar()


@pytest.fixture
def cropped_break_column(break_calendar: DailyCalendar) -> Column:
    """One-day column, 240px, with the 08:00-08:30 break cropped."""
    return create_column(
        calendar=break_calendar,
        working_mode=DisplayMode.VISIBLE,
        non_working_mode=DisplayMode.CROPPED,
    )
