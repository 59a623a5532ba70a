import asyncio
from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message
from ..config import TASKS_LIMIT
from ..keyboards import inline_per_task_actions
from ..models import Task
from ..store import list_tasks, search_tasks
from ..utils import pretty_task

router = Router()


async def send_cards(message: Message, title: str, tasks: list[Task]):
    if not tasks:
        await message.answer("Задач нет.")
        return
    await message.answer(f"{title}: {len(tasks)}")
    for t in tasks:
        await message.answer(pretty_task(t), reply_markup=inline_per_task_actions(t.id))
        await asyncio.sleep(0.05)  # мягкий троттлинг


@router.message(Command("list"))
async def cmd_list(message: Message):
    tasks = await list_tasks(TASKS_LIMIT)
    await send_cards(message, "Задачи по дате", tasks)


@router.message(Command("search"))
async def cmd_search(message: Message, command: CommandObject):
    query = (command.args or "").strip()
    if not query:
        await message.answer("Использование: /search <текст> или /search ДД.ММ.ГГГГ")
        return
    tasks = await search_tasks(query, TASKS_LIMIT)
    await send_cards(message, f"Найдено по «{query}»", tasks)
