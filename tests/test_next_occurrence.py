"""Tests for next_occurrence / next_date."""

from datetime import date, datetime, timedelta

import pytest

from planner.dates import is_after, parse_date
from planner.errors import (
    InvalidDateFormatError,
    InvalidIntervalError,
    InvalidRuleShapeError,
    NoMatchingWeekdayError,
    NoSuitableDateError,
)
from planner.models import Daily, Weekly
from planner.recurrence import next_date, next_occurrence, parse_rule


def nxt(anchor: str, now: str, rule: str) -> str:
    return next_date(parse_date(now), anchor, rule)


class TestDaily:
    def test_steps_past_now(self):
        assert nxt("20240113", "20240126", "d 7") == "20240127"

    def test_anchor_equal_to_now(self):
        assert nxt("20240101", "20240101", "d 1") == "20240102"

    def test_future_anchor_still_moves_one_step(self):
        assert nxt("20240201", "20240101", "d 3") == "20240204"

    def test_far_past_anchor(self):
        assert nxt("20000101", "20240126", "d 1") == "20240127"

    def test_crosses_leap_day(self):
        assert nxt("20240220", "20240227", "d 5") == "20240301"

    @pytest.mark.parametrize("interval", [1, 2, 7, 30, 399])
    def test_smallest_step_after_now(self, interval):
        anchor, now = date(2023, 11, 5), date(2024, 3, 1)
        result = next_occurrence(anchor, now, Daily(interval))
        steps, rest = divmod((result - anchor).days, interval)
        assert rest == 0 and steps >= 1
        assert is_after(result, now)
        assert not is_after(result - timedelta(days=interval), now)

    def test_datetime_now_uses_calendar_day(self):
        now = datetime(2024, 1, 26, 23, 59)
        assert next_occurrence(date(2024, 1, 13), now, Daily(7)) == date(2024, 1, 27)

    def test_overflow(self):
        with pytest.raises(NoSuitableDateError):
            nxt("99991231", "99991231", "d 1")


class TestYearly:
    def test_next_year(self):
        assert nxt("20240129", "20240131", "y") == "20250129"

    def test_future_anchor_still_moves_one_year(self):
        assert nxt("20250101", "20240101", "y") == "20260101"

    def test_leap_day_rolls_to_march(self):
        assert nxt("20200229", "20200301", "y") == "20210301"

    def test_rolled_date_is_next_anchor(self):
        assert nxt("20200229", "20210302", "y") == "20220301"

    def test_many_years(self):
        assert nxt("19900615", "20240101", "y") == "20240615"


class TestWeekly:
    def test_next_friday(self):
        # 26.01.2024 — пятница
        assert nxt("20240126", "20240126", "w 5") == "20240202"

    def test_floor_itself_matches(self):
        # 01.01.2024 — понедельник, следующий день вторник
        assert nxt("20240101", "20240101", "w 2") == "20240102"

    def test_sunday_is_seven(self):
        assert nxt("20240101", "20240126", "w 7") == "20240128"

    def test_earliest_of_several(self):
        assert nxt("20240101", "20240126", "w 1,3,6") == "20240127"

    def test_future_anchor(self):
        assert nxt("20240301", "20240101", "w 1") == "20240304"

    def test_result_is_earliest_matching_day(self):
        rule = Weekly(frozenset({2, 4}))
        now = date(2024, 5, 10)
        result = next_occurrence(date(2024, 1, 1), now, rule)
        floor = now + timedelta(days=1)
        assert result.isoweekday() in rule.days
        for offset in range((result - floor).days):
            assert (floor + timedelta(days=offset)).isoweekday() not in rule.days

    def test_empty_days(self):
        with pytest.raises(NoMatchingWeekdayError):
            next_occurrence(date(2024, 1, 1), date(2024, 1, 1), Weekly(frozenset()))


class TestMonthly:
    def test_last_day_in_leap_february(self):
        assert nxt("20240131", "20240201", "m -1") == "20240229"

    def test_second_to_last(self):
        assert nxt("20240201", "20240201", "m -2") == "20240228"

    def test_next_month(self):
        assert nxt("20240101", "20240101", "m 1") == "20240201"

    def test_floor_day_itself_is_skipped(self):
        # floor = 15.01, дата должна быть строго позже floor
        assert nxt("20240101", "20240114", "m 15") == "20240215"

    def test_days_are_sorted(self):
        assert nxt("20240110", "20240110", "m 25,5,-1") == "20240125"

    def test_day_past_month_end_is_skipped(self):
        assert nxt("20240401", "20240401", "m 31") == "20240531"

    def test_month_filter(self):
        assert nxt("20240101", "20240301", "m 1 2,8") == "20240801"

    def test_month_filter_wraps_year(self):
        assert nxt("20241101", "20241115", "m -1,1 2") == "20250201"

    def test_no_suitable_date(self):
        with pytest.raises(NoSuitableDateError):
            nxt("20240101", "20240101", "m 30 2")

    def test_result_respects_rule(self):
        rule = parse_rule("m 10,-1 3,6,9")
        now = date(2024, 3, 31)
        result = next_occurrence(date(2024, 1, 1), now, rule)
        assert result == date(2024, 6, 10)
        assert is_after(result, now + timedelta(days=1))


class TestNextDate:
    def test_boundary_scenario(self):
        assert next_date(date(2024, 1, 26), "20240113", "d 7") == "20240127"

    def test_empty_date(self):
        with pytest.raises(InvalidDateFormatError):
            next_date(date(2024, 1, 26), "", "d 7")

    def test_empty_repeat(self):
        with pytest.raises(InvalidRuleShapeError):
            next_date(date(2024, 1, 26), "20240113", "")

    def test_bad_date(self):
        with pytest.raises(InvalidDateFormatError):
            next_date(date(2024, 1, 26), "2024-01-13", "d 7")

    @pytest.mark.parametrize("rule", ["d 0", "d 400"])
    def test_interval_bounds(self, rule):
        with pytest.raises(InvalidIntervalError):
            next_date(date(2024, 1, 26), "20240113", rule)

    def test_weekly_without_days(self):
        with pytest.raises(InvalidRuleShapeError):
            next_date(date(2024, 1, 26), "20240113", "w")
