from datetime import date, timedelta
from .dates import format_date
from .utils import today


def make_due_today(base: date | None = None) -> str:
    return format_date(base or today())


def make_due_tomorrow(base: date | None = None) -> str:
    return format_date((base or today()) + timedelta(days=1))


def make_due_this_week(base: date | None = None) -> str:
    # Пн(0)..Вс(6) → ставим на воскресенье текущей недели
    day = base or today()
    return format_date(day + timedelta(days=6 - day.weekday()))
