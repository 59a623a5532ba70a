from aiogram.types import (
    ReplyKeyboardMarkup, KeyboardButton,
    InlineKeyboardMarkup, InlineKeyboardButton
)
from .dates import last_day_of_month

# Пресеты повторов: (подпись, правило)
REPEAT_PRESETS = [
    ("Каждый день", "d 1"),
    ("Каждую неделю", "d 7"),
    ("Каждый год", "y"),
    ("Будни", "w 1,2,3,4,5"),
    ("1-го числа", "m 1"),
    ("Последний день месяца", "m -1"),
]


def main_kb():
    return ReplyKeyboardMarkup(
        keyboard=[
            [KeyboardButton(text="➕ Добавить задачу")],
            [KeyboardButton(text="📋 Список"), KeyboardButton(text="✅ Сделано")],
            [KeyboardButton(text="🗑 Удалить"), KeyboardButton(text="❓ Помощь")],
        ],
        resize_keyboard=True,
    )


def years_kb(base_year: int) -> InlineKeyboardMarkup:
    y = base_year
    buttons = [[InlineKeyboardButton(text=str(y+i), callback_data=f"y:{y+i}") for i in range(0, 3)]]
    nav = [
        InlineKeyboardButton(text="⟵", callback_data=f"y_nav:{y-3}"),
        InlineKeyboardButton(text="Сегодня", callback_data="date_today"),
        InlineKeyboardButton(text="⟶", callback_data=f"y_nav:{y+3}")
    ]
    buttons.append(nav)
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def months_kb() -> InlineKeyboardMarkup:
    rows = []
    for r in range(0, 12, 3):
        rows.append([InlineKeyboardButton(text=str(m), callback_data=f"m:{m}") for m in range(1+r, 1+r+3)])
    rows.append([InlineKeyboardButton(text="◀ Год", callback_data="back:year")])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def days_kb(year: int, month: int) -> InlineKeyboardMarkup:
    total = last_day_of_month(year, month)
    buttons, row = [], []
    for d in range(1, total+1):
        row.append(InlineKeyboardButton(text=str(d), callback_data=f"d:{d}"))
        if len(row) == 7:
            buttons.append(row); row = []
    if row:
        buttons.append(row)
    buttons.append([InlineKeyboardButton(text="◀ Месяц", callback_data="back:month")])
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def comment_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[[
        InlineKeyboardButton(text="Без комментария", callback_data="comment_skip"),
    ]])


def repeat_kb() -> InlineKeyboardMarkup:
    rows = [[InlineKeyboardButton(text="Без повтора", callback_data="rep:none")]]
    for i in range(0, len(REPEAT_PRESETS), 2):
        rows.append([
            InlineKeyboardButton(text=label, callback_data=f"rep:{i+j}")
            for j, (label, _) in enumerate(REPEAT_PRESETS[i:i+2])
        ])
    return InlineKeyboardMarkup(inline_keyboard=rows)


def confirm_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[[
        InlineKeyboardButton(text="💾 Сохранить", callback_data="save_task"),
        InlineKeyboardButton(text="❌ Отмена", callback_data="cancel_task"),
    ]])


def inline_per_task_actions(task_id: str | int) -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(inline_keyboard=[
        [
            InlineKeyboardButton(text="📅 На сегодня", callback_data=f"qdue:today:{task_id}"),
            InlineKeyboardButton(text="📆 На завтра", callback_data=f"qdue:tom:{task_id}"),
        ],
        [
            InlineKeyboardButton(text="🗓 На этой неделе", callback_data=f"qdue:week:{task_id}"),
        ],
        [
            InlineKeyboardButton(text="✅ Сделано", callback_data=f"done:{task_id}"),
            InlineKeyboardButton(text="🗑 Удалить", callback_data=f"del:{task_id}")
        ]
    ])
