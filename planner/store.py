# planner/store.py
import logging
import sqlite3
from typing import Optional

from .dates import format_date, parse_user_date
from .db import db_conn
from .errors import TaskNotFoundError
from .models import Task

log = logging.getLogger(__name__)

_COLUMNS = "id, date, title, comment, repeat"


def _row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=str(row["id"]),
        date=row["date"],
        title=row["title"],
        comment=row["comment"],
        repeat=row["repeat"],
    )


def _lower(value: str | None) -> str:
    return (value or "").lower()


async def add_task(task: Task) -> int:
    async with db_conn() as db:
        cur = await db.execute(
            "INSERT INTO scheduler (date, title, comment, repeat) VALUES (?, ?, ?, ?)",
            (task.date, task.title, task.comment, task.repeat)
        )
        await db.commit()
        task_id = cur.lastrowid
    log.info("task %s added for %s", task_id, task.date)
    return task_id


async def get_task(task_id: str | int) -> Optional[Task]:
    async with db_conn() as db:
        cur = await db.execute(f"SELECT {_COLUMNS} FROM scheduler WHERE id=?", (task_id,))
        row = await cur.fetchone()
    return _row_to_task(row) if row else None


async def update_task(task: Task) -> None:
    async with db_conn() as db:
        cur = await db.execute(
            "UPDATE scheduler SET date=?, title=?, comment=?, repeat=? WHERE id=?",
            (task.date, task.title, task.comment, task.repeat, task.id)
        )
        await db.commit()
        if cur.rowcount == 0:
            raise TaskNotFoundError(f"incorrect id for updating task: {task.id}")


async def update_date(task_id: str | int, next_date: str) -> None:
    async with db_conn() as db:
        cur = await db.execute("UPDATE scheduler SET date=? WHERE id=?", (next_date, task_id))
        await db.commit()
        if cur.rowcount == 0:
            raise TaskNotFoundError(f"incorrect id for updating task date: {task_id}")


async def delete_task(task_id: str | int) -> None:
    async with db_conn() as db:
        cur = await db.execute("DELETE FROM scheduler WHERE id=?", (task_id,))
        await db.commit()
        if cur.rowcount == 0:
            raise TaskNotFoundError(f"incorrect id for deleting task: {task_id}")
    log.info("task %s deleted", task_id)


async def list_tasks(limit: int) -> list[Task]:
    async with db_conn() as db:
        cur = await db.execute(
            f"SELECT {_COLUMNS} FROM scheduler ORDER BY date ASC, id ASC LIMIT ?", (limit,)
        )
        rows = await cur.fetchall()
    return [_row_to_task(r) for r in rows]


async def search_tasks(search: str, limit: int) -> list[Task]:
    """'26.01.2024' ищет по дате, всё остальное — подстрока в заголовке или комментарии."""
    day = parse_user_date(search)
    async with db_conn() as db:
        if day is not None:
            cur = await db.execute(
                f"SELECT {_COLUMNS} FROM scheduler WHERE date=? ORDER BY id ASC LIMIT ?",
                (format_date(day), limit)
            )
        else:
            # LOWER() в SQLite понимает только ASCII
            await db.create_function("PYLOWER", 1, _lower, deterministic=True)
            pattern = f"%{search.lower()}%"
            cur = await db.execute(
                f"SELECT {_COLUMNS} FROM scheduler "
                "WHERE PYLOWER(title) LIKE ? OR PYLOWER(comment) LIKE ? "
                "ORDER BY date ASC, id ASC LIMIT ?",
                (pattern, pattern, limit)
            )
        rows = await cur.fetchall()
    return [_row_to_task(r) for r in rows]


async def tasks_due(until: str) -> list[Task]:
    """Задачи с датой не позже `until` (YYYYMMDD), для утренней сводки."""
    async with db_conn() as db:
        cur = await db.execute(
            f"SELECT {_COLUMNS} FROM scheduler WHERE date<=? ORDER BY date ASC, id ASC",
            (until,)
        )
        rows = await cur.fetchall()
    return [_row_to_task(r) for r in rows]
