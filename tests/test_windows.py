import logging

import pytest

from dwmlgen.config import ConfigError
from dwmlgen.ndfd import Product
from dwmlgen.summary import day_periods, night_periods, plan_window, pop_periods, summary_periods
from dwmlgen.util import DAY, HOUR, LocalClock, parse_timestamp as ts


def test_native_profiles_pass_times_through(clock: LocalClock) -> None:
    window = plan_window(
        Product.TIME_SERIES,
        clock,
        start_time=ts("2006-04-15T00:00:00Z"),
        end_time=ts("2006-04-17T00:00:00Z"),
        latest_time=ts("2006-04-20T00:00:00Z"),
    )
    assert window.start == ts("2006-04-15T00:00:00Z")
    assert window.end == ts("2006-04-17T00:00:00Z")
    assert window.anchor is None


def test_twelve_hourly_anchors_at_six_local(clock: LocalClock) -> None:
    window = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        num_days=7,
        earliest_time=ts("2006-04-15T12:00:00Z"),
        latest_time=ts("2006-04-22T12:00:00Z"),
        first_pop_time=ts("2006-04-16T00:00:00Z"),
    )
    assert window.anchor == ts("2006-04-15T10:00:00Z")
    assert window.six_cycle_first
    periods = summary_periods(window, Product.TWELVE_HOURLY)
    assert len(periods) == 14
    assert [p.is_day for p in periods[:3]] == [True, False, True]
    assert all(p.end - p.start == 12 * HOUR for p in periods)
    assert {clock.local_hour(p.start) for p in periods} == {6, 18}
    assert pop_periods(window) == periods
    assert (day_periods(window)[0].start, day_periods(window)[0].end) == (ts("2006-04-15T10:00:00Z"), ts("2006-04-15T22:00:00Z"))
    assert night_periods(window)[0].start == ts("2006-04-15T22:00:00Z")
    assert len(day_periods(window)) == len(night_periods(window)) == 7


def test_twelve_hourly_evening_issuance_starts_at_eighteen(clock: LocalClock) -> None:
    window = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        num_days=2,
        earliest_time=ts("2006-04-15T23:00:00Z"),
        first_pop_time=ts("2006-04-16T12:00:00Z"),
    )
    assert window.anchor == ts("2006-04-15T22:00:00Z")
    assert not window.six_cycle_first
    periods = summary_periods(window, Product.TWELVE_HOURLY)
    assert not periods[0].is_day
    assert day_periods(window)[0].start == ts("2006-04-16T10:00:00Z")
    assert night_periods(window)[0].start == ts("2006-04-15T22:00:00Z")


def test_twenty_four_hourly_moves_to_tomorrow_and_backs_pop_up(clock: LocalClock) -> None:
    window = plan_window(
        Product.TWENTY_FOUR_HOURLY,
        clock,
        num_days=3,
        earliest_time=ts("2006-04-15T23:00:00Z"),
        first_pop_time=ts("2006-04-16T12:00:00Z"),
    )
    assert window.first_day_tomorrow
    assert window.anchor == ts("2006-04-16T10:00:00Z")
    periods = summary_periods(window, Product.TWENTY_FOUR_HOURLY)
    assert len(periods) == 3
    assert all(p.end - p.start == DAY and p.is_day for p in periods)
    pops = pop_periods(window)
    assert len(pops) == 6
    assert pops[0].start == ts("2006-04-15T22:00:00Z")
    assert not pops[0].is_day


def test_evening_request_puts_daily_periods_on_eighteen(clock: LocalClock) -> None:
    window = plan_window(
        Product.TWENTY_FOUR_HOURLY,
        clock,
        start_time=ts("2006-04-15T23:30:00Z"),
        num_days=3,
        earliest_time=ts("2006-04-15T12:00:00Z"),
        latest_time=ts("2006-04-19T12:00:00Z"),
        now=ts("2006-04-15T23:00:00Z"),
    )
    assert window.evening_start
    assert window.anchor == ts("2006-04-15T10:00:00Z")
    assert summary_periods(window, Product.TWENTY_FOUR_HOURLY)[0].start == ts("2006-04-15T22:00:00Z")
    assert day_periods(window)[0].start == ts("2006-04-15T10:00:00Z")


def test_end_before_start_is_a_configuration_error(clock: LocalClock) -> None:
    with pytest.raises(ConfigError):
        plan_window(Product.TIME_SERIES, clock, start_time=100, end_time=100)
    with pytest.raises(ConfigError):
        plan_window(Product.TWELVE_HOURLY, clock, start_time=200, end_time=100)


def test_past_start_and_late_end_are_treated_as_absent(clock: LocalClock, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        window = plan_window(
            Product.TIME_SERIES,
            clock,
            start_time=ts("2006-04-15T00:00:00Z"),
            end_time=ts("2006-04-30T00:00:00Z"),
            latest_time=ts("2006-04-20T00:00:00Z"),
            now=ts("2006-04-15T06:00:00Z"),
        )
    assert window.start is None
    assert window.end is None
    assert "in the past" in caplog.text
    assert "beyond the last forecast value" in caplog.text


def test_day_count_from_user_window(clock: LocalClock) -> None:
    half_day = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        start_time=ts("2006-04-15T10:00:00Z"),
        end_time=ts("2006-04-15T22:00:00Z"),
        latest_time=ts("2006-04-22T00:00:00Z"),
    )
    assert half_day.num_days == 1
    three_days = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        start_time=ts("2006-04-15T10:00:00Z"),
        end_time=ts("2006-04-18T10:00:00Z"),
        latest_time=ts("2006-04-22T00:00:00Z"),
    )
    assert three_days.num_days == 3
    assert three_days.grid_end == ts("2006-04-18T10:00:00Z")


def test_day_count_from_data_is_capped(clock: LocalClock) -> None:
    window = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        earliest_time=ts("2006-04-15T12:00:00Z"),
        latest_time=ts("2006-04-22T00:00:00Z"),
        first_pop_time=ts("2006-04-16T00:00:00Z"),
    )
    assert window.num_days == 7
    longer = plan_window(
        Product.TWELVE_HOURLY,
        clock,
        earliest_time=ts("2006-04-15T12:00:00Z"),
        latest_time=ts("2006-04-30T00:00:00Z"),
        first_pop_time=ts("2006-04-16T00:00:00Z"),
    )
    assert longer.num_days == 7


def test_summary_without_any_reference_time_fails(clock: LocalClock) -> None:
    with pytest.raises(ConfigError):
        plan_window(Product.TWELVE_HOURLY, clock)
