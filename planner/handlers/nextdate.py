import re
from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from ..dates import parse_date
from ..errors import PlannerError
from ..recurrence import next_date
from ..utils import today

router = Router()

_DATE_TOKEN = re.compile(r"[0-9]{8}")


def parse_nextdate_args(args: str) -> tuple[str | None, str, str] | None:
    """'[now] <date> <rule...>' -> (now | None, date, rule)."""
    parts = args.split()
    if len(parts) >= 3 and _DATE_TOKEN.fullmatch(parts[0]) and _DATE_TOKEN.fullmatch(parts[1]):
        return parts[0], parts[1], " ".join(parts[2:])
    if len(parts) >= 2:
        return None, parts[0], " ".join(parts[1:])
    return None


@router.message(Command("nextdate"))
async def cmd_nextdate(message: Message, command: CommandObject):
    parsed = parse_nextdate_args(command.args or "")
    if parsed is None:
        await message.answer(
            "Использование: /nextdate [сегодня ГГГГММДД] <дата ГГГГММДД> <правило>\n"
            "Пример: /nextdate 20240126 20240113 d 7"
        )
        return
    now_text, date_text, repeat = parsed
    try:
        now = parse_date(now_text) if now_text else today()
        result = next_date(now, date_text, repeat)
    except PlannerError as e:
        await message.answer(f"Ошибка: {e}")
        return
    await message.answer(result)
