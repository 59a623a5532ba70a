# planner/auth.py
import hashlib
import hmac
import logging
from typing import Any, Awaitable, Callable

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject

from . import config
from .db import db_conn
from .utils import now_local, to_iso

log = logging.getLogger(__name__)

# Команды, доступные без входа
OPEN_COMMANDS = ("/start", "/help", "/signin")


def password_hash(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


async def register_chat(user_id: int) -> None:
    async with db_conn() as db:
        await db.execute(
            "INSERT INTO chats (user_id, pwd_hash, created_at) VALUES (?, NULL, ?) "
            "ON CONFLICT(user_id) DO NOTHING",
            (user_id, to_iso(now_local()))
        )
        await db.commit()


def sign_in_required() -> bool:
    return bool(config.PASSWORD)


async def sign_in(user_id: int, password: str) -> bool:
    if not sign_in_required():
        return False
    if not hmac.compare_digest(password.encode(), config.PASSWORD.encode()):
        log.warning("failed sign-in for chat %s", user_id)
        return False
    await register_chat(user_id)
    async with db_conn() as db:
        await db.execute(
            "UPDATE chats SET pwd_hash=? WHERE user_id=?",
            (password_hash(password), user_id)
        )
        await db.commit()
    log.info("chat %s signed in", user_id)
    return True


async def is_signed_in(user_id: int) -> bool:
    """Без пароля вход не нужен; иначе хэш в чате должен совпасть с текущим паролем."""
    if not sign_in_required():
        return True
    async with db_conn() as db:
        cur = await db.execute("SELECT pwd_hash FROM chats WHERE user_id=?", (user_id,))
        r = await cur.fetchone()
    if not r or not r["pwd_hash"]:
        return False
    return hmac.compare_digest(r["pwd_hash"], password_hash(config.PASSWORD))


def is_open_command(text: str | None) -> bool:
    if not text:
        return False
    command = text.split(maxsplit=1)[0].split("@", 1)[0]
    return command in OPEN_COMMANDS


class AuthMiddleware(BaseMiddleware):
    """Пропускает только вошедшие чаты, когда задан TODO_PASSWORD."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        user = getattr(event, "from_user", None)
        if user is None:
            return None
        if isinstance(event, Message):
            if is_open_command(event.text) or await is_signed_in(user.id):
                return await handler(event, data)
            await event.answer("Нужен вход: /signin <пароль>")
            return None
        if isinstance(event, CallbackQuery):
            if await is_signed_in(user.id):
                return await handler(event, data)
            await event.answer("Нужен вход: /signin <пароль>", show_alert=True)
            return None
        return await handler(event, data)
