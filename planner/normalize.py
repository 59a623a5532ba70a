from dataclasses import replace

from .dates import DateLike, format_date, is_after, parse_date
from .models import Task
from .recurrence import next_occurrence, parse_rule


def check_date(task: Task, now: DateLike) -> Task:
    """Return `task` with its date fixed up for saving.

    - пустая дата -> сегодня;
    - дата в прошлом без повтора -> сегодня;
    - дата в прошлом с повтором -> следующее повторение после now;
    - сегодня и будущее не трогаем.

    The rule is parsed and evaluated even for future dates, so a bad rule
    is always rejected.
    """
    today = format_date(now)
    stated = task.date or today
    day = parse_date(stated)

    upcoming = today
    if task.repeat:
        upcoming = format_date(next_occurrence(day, now, parse_rule(task.repeat)))

    if is_after(now, day):
        return replace(task, date=upcoming)
    return replace(task, date=stated)
