"""Recurrence rules: parsing and next-occurrence search.

Rule strings are space separated:

    d 7           every 7 days (1..399)
    y             every year
    w 1,4,5       Monday, Thursday, Friday (1 = Monday ... 7 = Sunday)
    m -1,1 2,8    last and first day of February and August
    m 15          15th of every month (-2 = the day before the last one)

Everything here is pure; nothing touches storage or Telegram.
"""
import re
from datetime import date, timedelta

from .dates import DateLike, add_years, as_date, format_date, is_after, last_day_of_month, parse_date
from .errors import (
    InvalidDateFormatError,
    InvalidIntervalError,
    InvalidMonthDayError,
    InvalidMonthError,
    InvalidRuleShapeError,
    InvalidWeekdayError,
    NoMatchingWeekdayError,
    NoSuitableDateError,
    UnsupportedRuleKindError,
)
from .models import Daily, Monthly, Rule, Weekly, Yearly

MAX_INTERVAL = 400       # интервал строго меньше
MONTH_SEARCH_LIMIT = 24  # месяцев вперёд для "m"

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _to_int(token: str) -> int | None:
    if not _INT_RE.fullmatch(token):
        return None
    return int(token)


def _int_list(token: str) -> list[int | None]:
    return [_to_int(part) for part in token.split(",")]


# ---------- разбор ----------

def parse_rule(text: str) -> Rule:
    tokens = (text or "").split()
    if not tokens:
        raise InvalidRuleShapeError("repeat rule is empty")

    kind, args = tokens[0], tokens[1:]

    if kind == "d":
        if not args:
            raise InvalidIntervalError(f"missing interval for daily rule: {text!r}")
        if len(args) > 1:
            raise InvalidRuleShapeError(f"invalid repeat format for daily: {text!r}")
        interval = _to_int(args[0])
        if interval is None or interval <= 0 or interval >= MAX_INTERVAL:
            raise InvalidIntervalError(f"invalid interval for daily: {args[0]!r}")
        return Daily(interval)

    if kind == "y":
        if args:
            raise InvalidRuleShapeError(f"invalid repeat format for yearly: {text!r}")
        return Yearly()

    if kind == "w":
        if len(args) != 1:
            raise InvalidRuleShapeError(f"weekly rule needs exactly one list of days: {text!r}")
        days = _int_list(args[0])
        for value, raw in zip(days, args[0].split(",")):
            if value is None or not 1 <= value <= 7:
                raise InvalidWeekdayError(f"invalid day of week: {raw!r}")
        return Weekly(frozenset(days))

    if kind == "m":
        if not 1 <= len(args) <= 2:
            raise InvalidRuleShapeError(f"invalid repeat format for monthly: {text!r}")
        days = _int_list(args[0])
        for value, raw in zip(days, args[0].split(",")):
            if value is None or value == 0 or not -2 <= value <= 31:
                raise InvalidMonthDayError(f"invalid day of month: {raw!r}")
        months: frozenset[int] = frozenset()
        if len(args) == 2:
            parsed = _int_list(args[1])
            for value, raw in zip(parsed, args[1].split(",")):
                if value is None or not 1 <= value <= 12:
                    raise InvalidMonthError(f"invalid month: {raw!r}")
            months = frozenset(parsed)
        return Monthly(tuple(days), months)

    raise UnsupportedRuleKindError(f"unsupported repeat type: {kind!r}")


def format_rule(rule: Rule) -> str:
    """Canonical text form; parse_rule(format_rule(r)) == r."""
    if isinstance(rule, Daily):
        return f"d {rule.interval}"
    if isinstance(rule, Yearly):
        return "y"
    if isinstance(rule, Weekly):
        return "w " + ",".join(str(d) for d in sorted(rule.days))
    if isinstance(rule, Monthly):
        text = "m " + ",".join(str(d) for d in rule.days)
        if rule.months:
            text += " " + ",".join(str(m) for m in sorted(rule.months))
        return text
    raise TypeError(f"unknown rule: {rule!r}")


# ---------- поиск следующей даты ----------

def _floor(anchor: date, now: date) -> date:
    # первый день после anchor, который строго позже now
    return max(anchor, now) + timedelta(days=1)


def _next_daily(anchor: date, now: date, interval: int) -> date:
    steps = max(1, (now - anchor).days // interval + 1)
    return anchor + timedelta(days=steps * interval)


def _next_yearly(anchor: date, now: date) -> date:
    current = add_years(anchor, 1)
    while not is_after(current, now):
        current = add_years(current, 1)
    return current


def _next_weekly(anchor: date, now: date, days: frozenset[int]) -> date:
    if not days:
        raise NoMatchingWeekdayError("no days of the week given")
    start = _floor(anchor, now)
    for offset in range(7):
        candidate = start + timedelta(days=offset)
        if candidate.isoweekday() in days:
            return candidate
    raise NoMatchingWeekdayError(f"no valid days of the week in {sorted(days)}")


def _month_candidates(year: int, month: int, days: tuple[int, ...]) -> list[int]:
    last = last_day_of_month(year, month)
    out = set()
    for d in days:
        if d == -1:
            out.add(last)
        elif d == -2:
            if last > 1:
                out.add(last - 1)
        elif 0 < d <= last:
            out.add(d)
    return sorted(out)


def _next_monthly(anchor: date, now: date, rule: Monthly) -> date:
    start = _floor(anchor, now)
    year, month = start.year, start.month
    for _ in range(MONTH_SEARCH_LIMIT):
        if not rule.months or month in rule.months:
            for day in _month_candidates(year, month, rule.days):
                candidate = date(year, month, day)
                if is_after(candidate, start):
                    return candidate
        month += 1
        if month > 12:
            year, month = year + 1, 1
    raise NoSuitableDateError("cannot find suitable date for given rules")


def next_occurrence(anchor: DateLike, now: DateLike, rule: Rule) -> date:
    """Next date of `rule` strictly after `now`, counted from `anchor`.

    Daily and yearly rules step from the anchor itself (at least one step);
    weekly and monthly rules search from the first day after both the anchor
    and `now`.
    """
    anchor, now = as_date(anchor), as_date(now)
    try:
        if isinstance(rule, Daily):
            return _next_daily(anchor, now, rule.interval)
        if isinstance(rule, Yearly):
            return _next_yearly(anchor, now)
        if isinstance(rule, Weekly):
            return _next_weekly(anchor, now, rule.days)
        if isinstance(rule, Monthly):
            return _next_monthly(anchor, now, rule)
    except (OverflowError, ValueError) as exc:
        # вышли за 9999 год
        raise NoSuitableDateError(f"date out of range: {exc}") from exc
    raise TypeError(f"unknown rule: {rule!r}")


def next_date(now: DateLike, date_text: str, repeat: str) -> str:
    """YYYYMMDD of the next occurrence, for the /nextdate query."""
    if not date_text:
        raise InvalidDateFormatError("date cannot be empty")
    if not repeat:
        raise InvalidRuleShapeError("repeat cannot be empty")
    anchor = parse_date(date_text)
    return format_date(next_occurrence(anchor, now, parse_rule(repeat)))
