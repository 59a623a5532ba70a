import logging
from dataclasses import replace
from aiogram import Router, F
from aiogram.exceptions import TelegramBadRequest
from aiogram.filters import Command, CommandObject
from aiogram.types import Message, CallbackQuery
from ..dates import format_user_date, parse_date
from ..errors import PlannerError, TaskNotFoundError
from ..keyboards import inline_per_task_actions
from ..quick_due import make_due_today, make_due_tomorrow, make_due_this_week
from ..store import get_task
from ..tasks import complete_task, edit_task, remove_task
from ..utils import now_local, pretty_task

log = logging.getLogger(__name__)

router = Router()


async def _load(task_id: str):
    task = await get_task(task_id)
    if task is None:
        raise TaskNotFoundError("Задача не найдена.")
    return task


def _split_args(command: CommandObject, n: int) -> list[str] | None:
    parts = (command.args or "").strip().split(maxsplit=n - 1)
    if len(parts) < n or not parts[0].isdigit():
        return None
    return parts


# Быстрые сроки
@router.callback_query(F.data.startswith("qdue:"))
async def cb_quick_due(call: CallbackQuery):
    _, kind, task_id = call.data.split(":")

    if kind == "today":
        new_date = make_due_today(); label = "сегодня"
    elif kind == "tom":
        new_date = make_due_tomorrow(); label = "завтра"
    else:
        new_date = make_due_this_week(); label = "на этой неделе"

    try:
        task = await _load(task_id)
        updated = await edit_task(replace(task, date=new_date), now_local())
    except PlannerError as e:
        await call.answer(str(e), show_alert=True)
        return

    try:
        await call.message.edit_text(pretty_task(updated))
        await call.message.edit_reply_markup(reply_markup=inline_per_task_actions(task_id))
    except TelegramBadRequest as e:
        log.debug("card %s not edited: %s", task_id, e)
    await call.answer(f"Срок установлен {label} ({format_user_date(parse_date(updated.date))})")


@router.message(Command("task"))
async def cmd_task(message: Message, command: CommandObject):
    parts = _split_args(command, 1)
    if parts is None:
        await message.answer("Использование: /task <id>")
        return
    try:
        task = await _load(parts[0])
    except PlannerError as e:
        await message.answer(str(e))
        return
    await message.answer(pretty_task(task), reply_markup=inline_per_task_actions(task.id))


async def _edit_field(message: Message, task_id: str, **changes):
    try:
        task = await _load(task_id)
        updated = await edit_task(replace(task, **changes), now_local())
    except PlannerError as e:
        await message.answer(f"Не сохранено: {e}")
        return
    await message.answer(pretty_task(updated), reply_markup=inline_per_task_actions(updated.id))


@router.message(Command("repeat"))
async def cmd_repeat(message: Message, command: CommandObject):
    parts = _split_args(command, 2)
    if parts is None:
        await message.answer("Использование: /repeat <id> <правило>, напр.: /repeat 12 w 1,5 (или '-' чтобы убрать)")
        return
    repeat = "" if parts[1].strip() == "-" else parts[1]
    await _edit_field(message, parts[0], repeat=repeat)


@router.message(Command("move"))
async def cmd_move(message: Message, command: CommandObject):
    parts = _split_args(command, 2)
    if parts is None:
        await message.answer("Использование: /move <id> <ГГГГММДД>")
        return
    await _edit_field(message, parts[0], date=parts[1].strip())


@router.message(Command("rename"))
async def cmd_rename(message: Message, command: CommandObject):
    parts = _split_args(command, 2)
    if parts is None:
        await message.answer("Использование: /rename <id> <новый заголовок>")
        return
    await _edit_field(message, parts[0], title=parts[1])


# Done/Delete + коллбэки
@router.message(Command("done"))
async def cmd_done_cmd(message: Message, command: CommandObject):
    parts = _split_args(command, 1)
    if parts is None:
        await message.answer("Использование: /done <id>")
        return
    await handle_done(parts[0], message)


@router.message(Command("delete"))
async def cmd_delete_cmd(message: Message, command: CommandObject):
    parts = _split_args(command, 1)
    if parts is None:
        await message.answer("Использование: /delete <id>")
        return
    await handle_delete(parts[0], message)


@router.callback_query(F.data.startswith("done:"))
async def cb_done(call: CallbackQuery):
    task_id = call.data.split(":")[1]
    if await handle_done(task_id, call.message, edit=True):
        await call.answer("Готово!")
    else:
        await call.answer()


@router.callback_query(F.data.startswith("del:"))
async def cb_del(call: CallbackQuery):
    task_id = call.data.split(":")[1]
    if await handle_delete(task_id, call.message, edit=True):
        await call.answer("Удалено")
    else:
        await call.answer()


async def _reply(msg_obj: Message, text: str, edit: bool):
    if edit:
        try:
            await msg_obj.edit_text(text)
            return
        except TelegramBadRequest as e:
            log.debug("message not edited: %s", e)
    await msg_obj.answer(text)


async def handle_done(task_id: str, msg_obj: Message, edit: bool = False) -> bool:
    try:
        task = await complete_task(task_id, now_local())
    except PlannerError as e:
        await msg_obj.answer(str(e))
        return False

    if task is None:
        text = f"Задача #{task_id}: ✅ выполнено и удалено"
    else:
        text = f"Задача #{task_id}: ✅ выполнено, следующий раз {format_user_date(parse_date(task.date))}"
    await _reply(msg_obj, text, edit)
    return True


async def handle_delete(task_id: str, msg_obj: Message, edit: bool = False) -> bool:
    try:
        await remove_task(task_id)
    except PlannerError as e:
        await msg_obj.answer(str(e))
        return False
    await _reply(msg_obj, f"Задача #{task_id}: 🗑 удалена", edit)
    return True
