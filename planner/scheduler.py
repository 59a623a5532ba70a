import logging
from aiogram import Bot
from aiogram.exceptions import TelegramAPIError
from . import config
from .auth import password_hash
from .dates import format_date
from .db import db_conn
from .models import Task
from .store import tasks_due
from .utils import today, pretty_task

log = logging.getLogger(__name__)


async def digest_recipients() -> list[int]:
    """Все зарегистрированные чаты; при заданном пароле — только вошедшие."""
    async with db_conn() as db:
        if config.PASSWORD:
            cur = await db.execute(
                "SELECT user_id FROM chats WHERE pwd_hash=? ORDER BY user_id",
                (password_hash(config.PASSWORD),)
            )
        else:
            cur = await db.execute("SELECT user_id FROM chats ORDER BY user_id")
        return [r["user_id"] for r in await cur.fetchall()]


def digest_text(tasks: list[Task], day: str) -> str | None:
    overdue = [t for t in tasks if t.date < day]
    today_rows = [t for t in tasks if t.date == day]
    if not overdue and not today_rows:
        return None

    lines = []
    if overdue:
        lines.append("❗ Просроченные:")
        lines += [f"— {pretty_task(t)}" for t in overdue]
    if today_rows:
        if lines:
            lines.append("")
        lines.append("📅 Сегодня:")
        lines += [f"— {pretty_task(t)}" for t in today_rows]
    return "Утренняя сводка задач:\n" + "\n".join(lines)


async def send_morning_digest(bot: Bot):
    day = format_date(today())
    text = digest_text(await tasks_due(day), day)
    if text is None:
        return

    for uid in await digest_recipients():
        try:
            await bot.send_message(uid, text)
        except TelegramAPIError as e:
            log.warning("digest not sent to %s: %s", uid, e)
