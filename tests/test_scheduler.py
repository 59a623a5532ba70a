from datetime import date

import pytest
from aiogram.exceptions import TelegramAPIError

from planner import auth, config, scheduler, store
from planner.models import Task


class FakeBot:
    def __init__(self, fail_for=()):
        self.sent = []
        self.fail_for = set(fail_for)

    async def send_message(self, chat_id, text):
        if chat_id in self.fail_for:
            raise TelegramAPIError(method=None, message="blocked")
        self.sent.append((chat_id, text))


@pytest.fixture
def today(monkeypatch):
    monkeypatch.setattr(scheduler, "today", lambda: date(2024, 1, 26))


def test_digest_text_groups_overdue_and_today():
    tasks = [
        Task(id="1", date="20240120", title="Отчёт"),
        Task(id="2", date="20240126", title="Тренировка", repeat="d 7"),
    ]

    text = scheduler.digest_text(tasks, "20240126")

    assert text.startswith("Утренняя сводка задач:")
    assert text.index("Просроченные") < text.index("Отчёт") < text.index("Сегодня") < text.index("Тренировка")


def test_digest_text_empty():
    assert scheduler.digest_text([], "20240126") is None


@pytest.mark.anyio
async def test_digest_sent_to_registered_chats(tmp_db, today, monkeypatch):
    monkeypatch.setattr(config, "PASSWORD", "")
    await auth.register_chat(10)
    await auth.register_chat(20)
    await store.add_task(Task(date="20240126", title="Тренировка"))
    await store.add_task(Task(date="20240127", title="Завтрашнее"))
    bot = FakeBot(fail_for={10})

    await scheduler.send_morning_digest(bot)

    assert [chat for chat, _ in bot.sent] == [20]
    assert "Тренировка" in bot.sent[0][1]
    assert "Завтрашнее" not in bot.sent[0][1]


@pytest.mark.anyio
async def test_digest_only_for_signed_in_chats(tmp_db, today, monkeypatch):
    monkeypatch.setattr(config, "PASSWORD", "secret")
    await auth.register_chat(10)
    await auth.sign_in(20, "secret")
    await store.add_task(Task(date="20240125", title="Отчёт"))
    bot = FakeBot()

    await scheduler.send_morning_digest(bot)

    assert [chat for chat, _ in bot.sent] == [20]


@pytest.mark.anyio
async def test_nothing_due_sends_nothing(tmp_db, today, monkeypatch):
    monkeypatch.setattr(config, "PASSWORD", "")
    await auth.register_chat(10)
    await store.add_task(Task(date="20240201", title="Потом"))
    bot = FakeBot()

    await scheduler.send_morning_digest(bot)

    assert bot.sent == []
