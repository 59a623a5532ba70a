"""Tests for parse_rule / format_rule."""

import pytest

from planner.errors import (
    InvalidIntervalError,
    InvalidMonthDayError,
    InvalidMonthError,
    InvalidRuleShapeError,
    InvalidWeekdayError,
    RuleError,
    UnsupportedRuleKindError,
)
from planner.models import Daily, Monthly, Weekly, Yearly
from planner.recurrence import format_rule, parse_rule


class TestDaily:
    @pytest.mark.parametrize("text, interval", [("d 1", 1), ("d 7", 7), ("d 399", 399), ("  d   30 ", 30)])
    def test_valid(self, text, interval):
        assert parse_rule(text) == Daily(interval)

    @pytest.mark.parametrize("text", ["d 0", "d 400", "d -1", "d x", "d 1.5", "d 1_0", "d"])
    def test_invalid_interval(self, text):
        with pytest.raises(InvalidIntervalError):
            parse_rule(text)

    def test_extra_token(self):
        with pytest.raises(InvalidRuleShapeError):
            parse_rule("d 1 2")


class TestYearly:
    def test_valid(self):
        assert parse_rule("y") == Yearly()

    def test_extra_token(self):
        with pytest.raises(InvalidRuleShapeError):
            parse_rule("y 1")


class TestWeekly:
    def test_valid(self):
        assert parse_rule("w 1,4,5") == Weekly(frozenset({1, 4, 5}))

    def test_duplicates_collapse(self):
        assert parse_rule("w 7,7,1") == Weekly(frozenset({1, 7}))

    @pytest.mark.parametrize("text", ["w 0", "w 8", "w 1,,2", "w a", "w 1,"])
    def test_invalid_day(self, text):
        with pytest.raises(InvalidWeekdayError):
            parse_rule(text)

    @pytest.mark.parametrize("text", ["w", "w 1 2"])
    def test_bad_shape(self, text):
        with pytest.raises(InvalidRuleShapeError):
            parse_rule(text)


class TestMonthly:
    def test_days_and_months(self):
        assert parse_rule("m -1,1 2,8") == Monthly((-1, 1), frozenset({2, 8}))

    def test_days_only_means_every_month(self):
        rule = parse_rule("m 15")
        assert rule == Monthly((15,))
        assert rule.months == frozenset()

    @pytest.mark.parametrize("text", ["m 0", "m 32", "m -3", "m 1,x", "m 1,,2"])
    def test_invalid_day(self, text):
        with pytest.raises(InvalidMonthDayError):
            parse_rule(text)

    @pytest.mark.parametrize("text", ["m 1 0", "m 1 13", "m 1 2,", "m 1 feb"])
    def test_invalid_month(self, text):
        with pytest.raises(InvalidMonthError):
            parse_rule(text)

    @pytest.mark.parametrize("text", ["m", "m 1 2 3"])
    def test_bad_shape(self, text):
        with pytest.raises(InvalidRuleShapeError):
            parse_rule(text)


class TestKinds:
    @pytest.mark.parametrize("text", ["x 1", "D 7", "daily", "1"])
    def test_unsupported(self, text):
        with pytest.raises(UnsupportedRuleKindError):
            parse_rule(text)

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty(self, text):
        with pytest.raises(InvalidRuleShapeError):
            parse_rule(text)

    def test_errors_share_a_base(self):
        with pytest.raises(RuleError):
            parse_rule("d 0")


class TestFormatRule:
    @pytest.mark.parametrize(
        "text, canonical",
        [
            ("d 7", "d 7"),
            ("y", "y"),
            ("w 5,1,4", "w 1,4,5"),
            ("m -1,1 8,2", "m -1,1 2,8"),
            ("m  15 ", "m 15"),
        ],
    )
    def test_canonical_text(self, text, canonical):
        rule = parse_rule(text)
        assert format_rule(rule) == canonical
        assert parse_rule(format_rule(rule)) == rule
