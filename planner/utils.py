# planner/utils.py
from datetime import date, datetime
from typing import Optional

from .config import TZ
from .dates import format_user_date, parse_date
from .errors import PlannerError
from .models import Daily, Monthly, Task, Weekly, Yearly
from .recurrence import parse_rule


# ---------- время ----------

def now_local() -> datetime:
    return datetime.now(TZ)


def today() -> date:
    return now_local().date()


def to_iso(dt: datetime | None) -> Optional[str]:
    return dt.replace(microsecond=0).isoformat() if dt else None


# ---------- humanize ----------

WEEKDAYS_RU = {1: "пн", 2: "вт", 3: "ср", 4: "чт", 5: "пт", 6: "сб", 7: "вс"}


def _ru_plural(n: int, forms: tuple[str, str, str]) -> str:
    n = abs(n) % 100
    n1 = n % 10
    if 11 <= n <= 19:
        return forms[2]
    if 2 <= n1 <= 4:
        return forms[1]
    if n1 == 1:
        return forms[0]
    return forms[2]


def _month_day_ru(d: int) -> str:
    if d == -1:
        return "последний день"
    if d == -2:
        return "предпоследний день"
    return f"{d}-е"


def human_rule(repeat: str | None) -> str:
    if not repeat:
        return "—"
    try:
        rule = parse_rule(repeat)
    except PlannerError:
        return f"{repeat} (некорректно)"

    if isinstance(rule, Daily):
        n = rule.interval
        if n == 1: return "каждый день"
        if n == 2: return "через день"
        return f"каждые {n} {_ru_plural(n, ('день', 'дня', 'дней'))}"
    if isinstance(rule, Yearly):
        return "каждый год"
    if isinstance(rule, Weekly):
        return "по дням недели: " + ", ".join(WEEKDAYS_RU[d] for d in sorted(rule.days))
    if isinstance(rule, Monthly):
        days = ", ".join(_month_day_ru(d) for d in rule.days)
        if not rule.months:
            return f"каждый месяц: {days}"
        months = ", ".join(str(m) for m in sorted(rule.months))
        return f"{days} в месяцах: {months}"
    return "—"


# ---------- форматирование карточки задачи ----------

def pretty_task(task: Task) -> str:
    """
    #7 Тренировка |

    дата: 26.01.2024 |

    повтор: через день

    💬 взять форму
    """
    header = f"#{task.id} {task.title} |"

    try:
        date_line = f"дата: {format_user_date(parse_date(task.date))} |"
    except PlannerError:
        date_line = f"дата: {task.date or '—'} |"

    rep_line = f"повтор: {human_rule(task.repeat)}"

    blocks = [header, date_line, rep_line]
    if task.comment:
        blocks.append(f"💬 {task.comment}")
    return "\n\n".join(blocks)
