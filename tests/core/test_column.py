"""Tests for Column construction, mapping and snapping."""

from datetime import date, datetime, time, timedelta

import pytest

from gantt_grid.core.column import Column
from gantt_grid.schemas import DisplayMode

from ..factories import DAY, NEXT_DAY, create_calendar, create_column, create_rule

TOLERANCE = timedelta(microseconds=999)


def _at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 1, day, hour, minute)


# ---------------------------------------------------------------------------
# Construction & bookkeeping
# ---------------------------------------------------------------------------


def test_column_initialization() -> None:
    column = create_column(left=100.0)
    assert column.duration == 86_400_000.0
    assert column.original_placement.left == 100.0
    assert column.original_placement.width == 240.0
    assert column.working_mode == DisplayMode.VISIBLE
    assert column.non_working_mode == DisplayMode.VISIBLE
    assert column.current_date is False
    # no calendar -> no partition
    assert column.time_frames == ()
    assert column.cropped is False


def test_column_accepts_mode_strings() -> None:
    column = create_column(working_mode="hidden", non_working_mode="cropped")
    assert column.working_mode is DisplayMode.HIDDEN
    assert column.non_working_mode is DisplayMode.CROPPED


def test_column_rejects_inverted_span() -> None:
    with pytest.raises(ValueError):
        Column(NEXT_DAY, DAY, 0.0, 240.0)


def test_column_rejects_negative_width() -> None:
    with pytest.raises(ValueError):
        Column(DAY, NEXT_DAY, 0.0, -1.0)


def test_zero_duration_column_fails_with_calendar(break_calendar) -> None:
    with pytest.raises(ValueError):
        Column(DAY, DAY, 0.0, 240.0, break_calendar)


def test_zero_duration_column_without_calendar() -> None:
    column = Column(DAY, DAY, 10.0, 0.0)
    assert column.date_from_position(5.0) == DAY
    assert column.position_from_date(DAY) == 10.0


def test_both_modes_hidden_skip_time_frames(break_calendar) -> None:
    column = create_column(
        calendar=break_calendar, working_mode="hidden", non_working_mode="hidden"
    )
    assert column.time_frames == ()
    assert column.visible_time_frames == ()
    assert not column.day_index


def test_contains_instant_is_half_open() -> None:
    column = create_column()
    assert not column.contains_instant(DAY)
    assert column.contains_instant(_at(12))
    assert column.contains_instant(NEXT_DAY)
    assert not column.contains_instant(NEXT_DAY + timedelta(microseconds=1))


def test_equality_by_start_only(break_calendar) -> None:
    a = create_column(width=240.0)
    b = create_column(width=100.0, calendar=break_calendar)
    c = create_column(start=_at(1), end=NEXT_DAY)
    assert a.equals(b)
    assert a == b
    assert hash(a) == hash(b)
    assert a != c


def test_clone_rebuilds_partition(cropped_break_column) -> None:
    clone = cropped_break_column.clone()

    assert clone is not cropped_break_column
    assert clone.calendar is cropped_break_column.calendar
    assert clone.non_working_mode == DisplayMode.CROPPED
    assert clone.time_frames == cropped_break_column.time_frames
    assert all(
        a is not b
        for a, b in zip(clone.time_frames, cropped_break_column.time_frames)
    )


def test_update_time_frames_replaces_partition(cropped_break_column) -> None:
    before = cropped_break_column.time_frames
    cropped_break_column.non_working_mode = DisplayMode.VISIBLE
    cropped_break_column.update_time_frames()

    assert cropped_break_column.time_frames != before
    assert not any(f.cropped for f in cropped_break_column.time_frames)
    assert len(cropped_break_column.visible_time_frames) == 3


def test_get_day_time_frames_miss_is_empty(cropped_break_column) -> None:
    assert len(cropped_break_column.get_day_time_frames(_at(12))) == 3
    assert cropped_break_column.get_day_time_frames(datetime(2030, 1, 1)) == ()


# ---------------------------------------------------------------------------
# Cropping scenario: 08:00-08:30 break cropped out of a 240px day
# ---------------------------------------------------------------------------


def test_cropped_break_scenario(cropped_break_column) -> None:
    frames = cropped_break_column.time_frames
    visible = cropped_break_column.visible_time_frames

    assert len(visible) == 2
    assert all(f.working for f in visible)
    assert visible[0].left == pytest.approx(0.0)
    assert visible[0].left + visible[0].width == pytest.approx(visible[1].left)
    assert visible[1].left + visible[1].width == pytest.approx(240.0)

    cropped = [f for f in frames if f.cropped]
    assert len(cropped) == 1
    assert cropped[0].width == 0.0
    assert cropped[0].left is None
    assert cropped_break_column.cropped is False


def test_cropped_position_skips_cropped_frame(cropped_break_column) -> None:
    ratio = 240.0 / 235.0
    assert cropped_break_column.position_from_date(_at(4)) == pytest.approx(
        40.0 * ratio
    )
    # inside the break -> start of the next kept frame
    assert cropped_break_column.position_from_date(_at(8, 15)) == pytest.approx(
        80.0 * ratio
    )
    assert cropped_break_column.position_from_date(_at(8, 30)) == pytest.approx(
        80.0 * ratio
    )
    assert cropped_break_column.position_from_date(_at(16, 15)) == pytest.approx(
        (80.0 + 77.5) * ratio
    )


def test_cropped_position_includes_column_left(break_calendar) -> None:
    column = create_column(
        left=1000.0, calendar=break_calendar, non_working_mode="cropped"
    )
    assert column.position_from_date(NEXT_DAY) == pytest.approx(1240.0)
    assert column.position_from_date(DAY) == pytest.approx(1000.0)


def test_cropped_date_from_position(cropped_break_column) -> None:
    first = cropped_break_column.visible_time_frames[0]
    boundary = first.left + first.width
    assert abs(cropped_break_column.date_from_position(boundary) - _at(8)) < TOLERANCE
    assert (
        abs(cropped_break_column.date_from_position(boundary + 0.001) - _at(8, 30))
        < timedelta(seconds=1)
    )
    assert abs(cropped_break_column.date_from_position(240.0) - NEXT_DAY) < TOLERANCE


def test_all_cropped_column(break_calendar) -> None:
    column = create_column(
        calendar=break_calendar, working_mode="cropped", non_working_mode="cropped"
    )
    assert column.cropped is True
    assert column.visible_time_frames == ()
    # no kept frame: linear fallback
    assert column.date_from_position(120.0) == _at(12)


def test_cropped_instant_moves_into_next_day() -> None:
    calendar = create_calendar(create_rule(start=time(20), end=None))
    column = Column(
        DAY, _at(0, day=3), 0.0, 480.0, calendar, "visible", "cropped"
    )

    assert column.position_from_date(_at(20)) == pytest.approx(240.0)
    assert column.position_from_date(_at(22)) == pytest.approx(240.0)
    assert column.position_from_date(_at(10, day=2)) == pytest.approx(360.0)
    # last cropped frame of the column resolves to its right edge
    assert column.position_from_date(_at(21, day=2)) == pytest.approx(480.0)
    assert abs(column.date_from_position(360.0) - _at(10, day=2)) < TOLERANCE


def test_day_index_keys(break_calendar) -> None:
    column = Column(_at(12), _at(12, day=3), 0.0, 480.0, break_calendar)
    assert list(column.day_index) == [
        date(2024, 1, 1),
        date(2024, 1, 2),
        date(2024, 1, 3),
    ]


def test_day_index_is_read_only(cropped_break_column) -> None:
    with pytest.raises(TypeError):
        cropped_break_column.day_index[date(2030, 1, 1)] = ()
    assert date(2030, 1, 1) not in cropped_break_column.partition.day_index


# ---------------------------------------------------------------------------
# Linear mapping
# ---------------------------------------------------------------------------


def test_clamped_positions() -> None:
    column = create_column()
    assert column.date_from_position(-5.0) == column.date_from_position(0.0)
    assert column.date_from_position(340.0) == column.date_from_position(240.0)
    assert column.date_from_position(0.0) == DAY
    assert column.date_from_position(240.0) == NEXT_DAY
    assert column.position_from_date(datetime(2023, 12, 31)) == 0.0
    assert column.position_from_date(datetime(2024, 1, 5)) == 240.0


@pytest.mark.parametrize(
    "instant",
    [_at(0, 1), _at(6, 30), _at(13, 37), datetime(2024, 1, 1, 23, 59, 59, 1000)],
)
def test_round_trip_instant(break_calendar, instant) -> None:
    column = create_column(left=50.0, calendar=break_calendar)
    position = column.position_from_date(instant) - column.left
    assert abs(column.date_from_position(position) - instant) < TOLERANCE


@pytest.mark.parametrize("position", [0.5, 60.0, 137.25, 239.9])
def test_round_trip_position(position) -> None:
    column = create_column(left=50.0)
    instant = column.date_from_position(position)
    assert column.position_from_date(instant) - column.left == pytest.approx(
        position, abs=1e-6
    )


# ---------------------------------------------------------------------------
# Snapping
# ---------------------------------------------------------------------------


def test_snap_hour_down_scenario() -> None:
    column = create_column()
    position = column.position_from_date(_at(13, 37))
    assert column.date_from_position(position, 1, "hour", midpoint="down") == _at(13)
    assert column.date_from_position(position, 1, "hour") == _at(13)


def test_snap_quarter_hour_ignores_seconds() -> None:
    column = create_column()
    position = column.position_from_date(datetime(2024, 1, 1, 10, 7, 50))
    assert column.date_from_position(position, 15, "minute") == _at(10)


def test_snap_disabled_without_value_or_unit() -> None:
    column = create_column()
    instant = column.date_from_position(100.0)
    assert column.date_from_position(100.0, None, "hour") == instant
    assert column.date_from_position(100.0, 0, "hour") == instant
    assert column.date_from_position(100.0, -1, "hour") == instant
    assert column.date_from_position(100.0, 1, None) == instant


@pytest.mark.parametrize(
    "position, expected",
    [(96.0, DAY), (144.0, NEXT_DAY), (120.0, NEXT_DAY), (119.0, DAY)],
)
def test_snap_to_column_edges(position, expected) -> None:
    # 40% -> start, 60% -> end, exactly half way -> end
    column = create_column(left=500.0)
    assert column.date_from_position(position, 1, "column") == expected


def test_snap_is_clamped_to_column() -> None:
    column = Column(_at(6), _at(18), 0.0, 240.0)
    # nearest midnight is outside the column: clamp to the nearer edge
    assert column.magnet_date(_at(7), 24, "hour") == _at(6)
    assert column.magnet_date(_at(17), 24, "hour") == _at(18)
    assert column.magnet_date(_at(17), 1, "day") == _at(6)
    assert column.magnet_date(_at(12), 1, "month") == _at(6)


def test_snap_to_time_frame_transition(break_calendar) -> None:
    column = create_column(calendar=break_calendar)
    assert column.magnet_date(_at(8, 20), 1, "hour", True) == _at(8, 30)
    # tie with the rounded value keeps the rounded value
    assert column.magnet_date(_at(8, 15), 1, "hour", True) == _at(8)
    # without the frame magnet, unit rounding alone
    assert column.magnet_date(_at(8, 20), 1, "hour", False) == _at(8)


def test_snap_to_time_frame_with_column_unit(break_calendar) -> None:
    column = create_column(calendar=break_calendar)
    assert column.magnet_date(_at(8, 10), 1, "column", True) == _at(8)
