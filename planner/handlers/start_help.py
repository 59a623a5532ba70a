from aiogram import Router, F
from aiogram.filters import CommandStart, Command, CommandObject
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from aiogram.utils.markdown import code

from ..auth import register_chat, sign_in, sign_in_required
from ..keyboards import main_kb

router = Router()


@router.message(CommandStart())
async def cmd_start(message: Message):
    await register_chat(message.from_user.id)
    hint = "\n\nСначала войдите: /signin <пароль>" if sign_in_required() else ""
    await message.answer(
        "Привет! Бот-планировщик задач с повторениями и утренней сводкой.\n\n"
        "Команды:\n"
        "• /add — добавить задачу (мастер)\n"
        "• /cancel — прервать добавление\n"
        "• /list — ближайшие задачи\n"
        "• /search <текст|ДД.ММ.ГГГГ> — поиск\n"
        "• /task <id> — карточка задачи\n"
        "• /done <id> — выполнить\n"
        "• /delete <id> — удалить\n"
        "• /repeat <id> <правило> — задать повтор\n"
        "• /move <id> <ГГГГММДД> — перенести\n"
        "• /rename <id> <текст> — переименовать\n"
        "• /nextdate [сегодня] <дата> <правило> — следующая дата\n"
        "• /help — правила повтора" + hint,
        reply_markup=main_kb()
    )


@router.message(Command("help"))
async def cmd_help(message: Message):
    await message.answer(
        "Правила повтора:\n"
        "• d N — каждые N дней (1..399)\n"
        "• y — каждый год\n"
        "• w 1,4,5 — по дням недели (1 = пн … 7 = вс)\n"
        "• m 1,15 — по числам месяца; -1 — последний день, -2 — предпоследний\n"
        "• m -1 2,8 — последний день февраля и августа\n\n"
        "Выполненная задача с повтором переносится на следующую дату, без повтора — удаляется.\n"
        "Прошедшая дата при сохранении сдвигается на сегодня или на ближайший повтор."
    )


@router.message(Command("signin"))
async def cmd_signin(message: Message, command: CommandObject):
    if not sign_in_required():
        await message.answer("Пароль не задан, вход не требуется.", reply_markup=main_kb())
        return
    password = (command.args or "").strip()
    if not password:
        await message.answer("Использование: /signin <пароль>")
        return
    if not await sign_in(message.from_user.id, password):
        await message.answer("Неверный пароль.")
        return
    await message.answer("Вход выполнен ✅", reply_markup=main_kb())


# Текстовые кнопки главного меню
from .add_wizard import cmd_add  # переиспользуем
from .list_filter import cmd_list


@router.message(F.text == "➕ Добавить задачу")
async def kb_add(message: Message, state: FSMContext):
    await cmd_add(message, state)


@router.message(F.text == "📋 Список")
async def kb_list(message: Message):
    await cmd_list(message)


@router.message(F.text == "✅ Сделано")
async def kb_done_prompt(message: Message):
    await message.answer("Отправьте команду: " + code("/done <id>"))


@router.message(F.text == "🗑 Удалить")
async def kb_del_prompt(message: Message):
    await message.answer("Отправьте команду: " + code("/delete <id>"))


@router.message(F.text == "❓ Помощь")
async def kb_help(message: Message):
    await cmd_help(message)
