"""Saving, editing and completing tasks.

Every submitted task goes through `check_date` before it reaches the
store; completing a repeating task only moves its date.
"""
import logging
from dataclasses import replace
from typing import Optional

from . import store
from .dates import DateLike, format_date, parse_date
from .errors import EmptyTitleError, TaskNotFoundError
from .models import Task
from .normalize import check_date
from .recurrence import next_occurrence, parse_rule

log = logging.getLogger(__name__)


def _validated(task: Task, now: DateLike) -> Task:
    title = task.title.strip()
    if not title:
        raise EmptyTitleError("title cannot be empty")
    return check_date(replace(task, title=title, repeat=task.repeat.strip()), now)


async def create_task(title: str, date: str, comment: str, repeat: str, now: DateLike) -> Task:
    task = _validated(Task(date=date, title=title, comment=comment, repeat=repeat), now)
    task_id = await store.add_task(task)
    return replace(task, id=str(task_id))


async def edit_task(task: Task, now: DateLike) -> Task:
    task = _validated(task, now)
    await store.update_task(task)
    return task


async def complete_task(task_id: str | int, now: DateLike) -> Optional[Task]:
    """Mark a task done.

    Without a repeat rule the task is deleted and None is returned;
    otherwise its date moves to the next occurrence after `now`.
    """
    task = await store.get_task(task_id)
    if task is None:
        raise TaskNotFoundError(f"task {task_id} not found")

    if not task.repeats:
        await store.delete_task(task.id)
        return None

    nxt = format_date(next_occurrence(parse_date(task.date), now, parse_rule(task.repeat)))
    await store.update_date(task.id, nxt)
    log.info("task %s done, next date %s", task.id, nxt)
    return replace(task, date=nxt)


async def remove_task(task_id: str | int) -> None:
    await store.delete_task(task_id)
