# planner/dates.py
import re
from datetime import date, datetime
from typing import Union

from .errors import InvalidDateFormatError

USER_DATE_FORMAT = "%d.%m.%Y"  # 26.01.2024

_DATE_RE = re.compile(r"[0-9]{8}")
_USER_DATE_RE = re.compile(r"[0-9]{2}\.[0-9]{2}\.[0-9]{4}")

DateLike = Union[date, datetime]


# ---------- формат YYYYMMDD ----------

def parse_date(text: str) -> date:
    if not isinstance(text, str) or not _DATE_RE.fullmatch(text):
        raise InvalidDateFormatError(f"invalid date {text!r}, expected YYYYMMDD")
    try:
        return date(int(text[:4]), int(text[4:6]), int(text[6:]))
    except ValueError as exc:
        raise InvalidDateFormatError(f"invalid date {text!r}: {exc}") from exc


def format_date(value: DateLike) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def parse_user_date(text: str) -> date | None:
    """'26.01.2024' -> date, всё остальное -> None."""
    s = (text or "").strip()
    if not _USER_DATE_RE.fullmatch(s):
        return None
    try:
        return datetime.strptime(s, USER_DATE_FORMAT).date()
    except ValueError:
        return None


def format_user_date(value: DateLike) -> str:
    return f"{value.day:02d}.{value.month:02d}.{value.year:04d}"


# ---------- календарная математика ----------

def is_after(a: DateLike, b: DateLike) -> bool:
    """True when a's calendar day is strictly later than b's.

    Only (year, month, day) take part in the comparison, so a datetime
    late in the evening is not "after" a date of the same day.
    """
    return (a.year, a.month, a.day) > (b.year, b.month, b.day)


def is_leap(year: int) -> bool:
    return (year % 400 == 0) or (year % 4 == 0 and year % 100 != 0)


def last_day_of_month(year: int, month: int) -> int:
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    if month in (4, 6, 9, 11):
        return 30
    return 29 if is_leap(year) else 28


def add_years(value: date, years: int) -> date:
    # 29.02 + 1 год -> 01.03
    try:
        return value.replace(year=value.year + years)
    except ValueError:
        return date(value.year + years, 3, 1)


def as_date(value: DateLike) -> date:
    return date(value.year, value.month, value.day)
