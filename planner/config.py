import os
from dotenv import load_dotenv
from zoneinfo import ZoneInfo

load_dotenv()

# Токен проверяется при старте бота (bot.py), а не при импорте
BOT_TOKEN = os.getenv("BOT_TOKEN", "")

TZ = ZoneInfo(os.getenv("TODO_TZ", "Asia/Tashkent"))
DB_PATH = os.getenv("TODO_DBFILE", "scheduler.db")

# Пустой пароль => вход не требуется
PASSWORD = os.getenv("TODO_PASSWORD", "")

# Время ежедневной сводки
MORNING_DIGEST_HOUR = int(os.getenv("TODO_DIGEST_HOUR", "9"))

LOG_LEVEL = os.getenv("TODO_LOG_LEVEL", "INFO").upper()

# Сколько задач отдаём в /list и /search
TASKS_LIMIT = 50
