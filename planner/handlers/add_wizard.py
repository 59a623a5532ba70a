from aiogram import Router, F
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import StatesGroup, State
from aiogram.types import Message, CallbackQuery
from ..keyboards import (
    years_kb, months_kb, days_kb, comment_kb, repeat_kb, confirm_kb, REPEAT_PRESETS
)
from ..dates import parse_date, format_user_date
from ..errors import PlannerError
from ..recurrence import parse_rule, format_rule
from ..tasks import create_task
from ..utils import now_local, human_rule, pretty_task

router = Router()

# Команды в шагах мастера обрабатывают свои роутеры
NOT_COMMAND = ~F.text.startswith("/")


class AddTask(StatesGroup):
    waiting_title = State()
    picking_date = State()
    waiting_comment = State()
    picking_repeat = State()
    confirming = State()


def selection_preview(data: dict) -> str:
    y = data.get("year"); m = data.get("month"); d = data.get("day")
    comment = data.get("comment")
    repeat = data.get("repeat")

    date_str = "сегодня"
    if all(v is not None for v in (y, m, d)):
        date_str = f"{d:02d}.{m:02d}.{y:04d}"

    return (
        f"🧩 Новая задача: {data.get('title', '')}\n"
        f"• Дата: {date_str}\n"
        f"• Комментарий: {comment or 'нет'}\n"
        f"• Повтор: {human_rule(repeat)}\n"
    )


def selected_date(data: dict) -> str:
    y, m, d = data.get("year"), data.get("month"), data.get("day")
    if any(v is None for v in (y, m, d)):
        return ""
    return f"{y:04d}{m:02d}{d:02d}"


@router.message(Command("add"))
async def cmd_add(message: Message, state: FSMContext):
    await state.set_state(AddTask.waiting_title)
    await message.answer("Шаг 1/4. Отправьте текст задачи (/cancel — отменить):")


@router.message(Command("cancel"))
async def cmd_cancel(message: Message, state: FSMContext):
    if await state.get_state() is None:
        await message.answer("Нечего отменять.")
        return
    await state.clear()
    await message.answer("Отменено.")


@router.message(AddTask.waiting_title, NOT_COMMAND)
async def st_title(message: Message, state: FSMContext):
    title = (message.text or "").strip()
    if not title:
        await message.answer("Текст пуст. Повторите:")
        return
    await state.update_data(title=title, year=None, month=None, day=None, comment="", repeat="")
    await state.set_state(AddTask.picking_date)
    txt = selection_preview(await state.get_data()) + "\nШаг 2/4. Выберите ГОД:"
    await message.answer(txt, reply_markup=years_kb(now_local().year))


@router.callback_query(AddTask.picking_date, F.data.startswith("y_nav:"))
async def cb_year_nav(call: CallbackQuery, state: FSMContext):
    base = int(call.data.split(":")[1])
    await call.message.edit_text(selection_preview(await state.get_data()) + "\nШаг 2/4. Выберите ГОД:")
    await call.message.edit_reply_markup(reply_markup=years_kb(base))
    await call.answer()


@router.callback_query(AddTask.picking_date, F.data.startswith("y:"))
async def cb_year(call: CallbackQuery, state: FSMContext):
    year = int(call.data.split(":")[1])
    await state.update_data(year=year, month=None, day=None)
    await call.message.edit_text(selection_preview(await state.get_data()) + "\nВыберите МЕСЯЦ:")
    await call.message.edit_reply_markup(reply_markup=months_kb())
    await call.answer()


@router.callback_query(AddTask.picking_date, F.data == "back:year")
async def cb_back_year(call: CallbackQuery, state: FSMContext):
    await state.update_data(year=None, month=None, day=None)
    await call.message.edit_text(selection_preview(await state.get_data()) + "\nШаг 2/4. Выберите ГОД:")
    await call.message.edit_reply_markup(reply_markup=years_kb(now_local().year))
    await call.answer()


@router.callback_query(AddTask.picking_date, F.data.startswith("m:"))
async def cb_month(call: CallbackQuery, state: FSMContext):
    month = int(call.data.split(":")[1])
    data = await state.get_data()
    if not data.get("year"):
        await call.answer("Сначала выберите год", show_alert=True)
        return
    await state.update_data(month=month, day=None)
    await call.message.edit_text(selection_preview(await state.get_data()) + "\nВыберите ДЕНЬ:")
    await call.message.edit_reply_markup(reply_markup=days_kb(data["year"], month))
    await call.answer()


@router.callback_query(AddTask.picking_date, F.data == "back:month")
async def cb_back_month(call: CallbackQuery, state: FSMContext):
    await state.update_data(month=None, day=None)
    await call.message.edit_text(selection_preview(await state.get_data()) + "\nВыберите МЕСЯЦ:")
    await call.message.edit_reply_markup(reply_markup=months_kb())
    await call.answer()


async def _ask_comment(call: CallbackQuery, state: FSMContext):
    await state.set_state(AddTask.waiting_comment)
    await call.message.edit_text(
        selection_preview(await state.get_data()) + "\nШаг 3/4. Отправьте комментарий:"
    )
    await call.message.edit_reply_markup(reply_markup=comment_kb())
    await call.answer()


@router.callback_query(AddTask.picking_date, F.data.startswith("d:"))
async def cb_day(call: CallbackQuery, state: FSMContext):
    day = int(call.data.split(":")[1])
    await state.update_data(day=day)
    await _ask_comment(call, state)


@router.callback_query(AddTask.picking_date, F.data == "date_today")
async def cb_date_today(call: CallbackQuery, state: FSMContext):
    await state.update_data(year=None, month=None, day=None)
    await _ask_comment(call, state)


async def _ask_repeat(message: Message, state: FSMContext, edit: bool = False):
    await state.set_state(AddTask.picking_repeat)
    txt = (selection_preview(await state.get_data())
           + "\nШаг 4/4. Повтор: выберите или отправьте правило (d 7, y, w 1,5, m -1 2,8):")
    if edit:
        await message.edit_text(txt)
        await message.edit_reply_markup(reply_markup=repeat_kb())
    else:
        await message.answer(txt, reply_markup=repeat_kb())


@router.message(AddTask.waiting_comment, NOT_COMMAND)
async def st_comment(message: Message, state: FSMContext):
    comment = (message.text or "").strip()
    await state.update_data(comment="" if comment == "-" else comment)
    await _ask_repeat(message, state)


@router.callback_query(AddTask.waiting_comment, F.data == "comment_skip")
async def cb_comment_skip(call: CallbackQuery, state: FSMContext):
    await state.update_data(comment="")
    await _ask_repeat(call.message, state, edit=True)
    await call.answer()


async def _ask_confirm(message: Message, state: FSMContext, edit: bool = False):
    await state.set_state(AddTask.confirming)
    txt = selection_preview(await state.get_data()) + "\nПроверить и сохранить?"
    if edit:
        await message.edit_text(txt)
        await message.edit_reply_markup(reply_markup=confirm_kb())
    else:
        await message.answer(txt, reply_markup=confirm_kb())


@router.callback_query(AddTask.picking_repeat, F.data.startswith("rep:"))
async def cb_repeat(call: CallbackQuery, state: FSMContext):
    val = call.data.split(":")[1]
    repeat = "" if val == "none" else REPEAT_PRESETS[int(val)][1]
    await state.update_data(repeat=repeat)
    await _ask_confirm(call.message, state, edit=True)
    await call.answer()


@router.message(AddTask.picking_repeat, NOT_COMMAND)
async def st_repeat(message: Message, state: FSMContext):
    text = (message.text or "").strip()
    try:
        repeat = format_rule(parse_rule(text))
    except PlannerError as e:
        await message.answer(f"Некорректное правило: {e}\nПовторите или выберите кнопку.")
        return
    await state.update_data(repeat=repeat)
    await _ask_confirm(message, state)


@router.callback_query(AddTask.confirming, F.data == "save_task")
async def cb_save(call: CallbackQuery, state: FSMContext):
    data = await state.get_data()
    try:
        task = await create_task(
            title=data.get("title", ""),
            date=selected_date(data),
            comment=data.get("comment", ""),
            repeat=data.get("repeat", ""),
            now=now_local(),
        )
    except PlannerError as e:
        await call.answer(f"Не сохранено: {e}", show_alert=True)
        return

    await state.clear()
    await call.message.edit_text(f"Задача добавлена ✅ ({format_user_date(parse_date(task.date))})\n\n"
                                 + pretty_task(task))
    await call.message.edit_reply_markup(reply_markup=None)
    await call.answer()


@router.callback_query(AddTask.confirming, F.data == "cancel_task")
async def cb_cancel(call: CallbackQuery, state: FSMContext):
    await state.clear()
    await call.message.edit_text("Отменено.")
    await call.message.edit_reply_markup(reply_markup=None)
    await call.answer()
