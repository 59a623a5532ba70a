import sqlite3
import aiosqlite
from contextlib import asynccontextmanager
from .config import DB_PATH

SCHEMA = """
CREATE TABLE IF NOT EXISTS scheduler (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    date CHAR(8) NOT NULL DEFAULT '',          -- YYYYMMDD
    title VARCHAR(128) NOT NULL DEFAULT '',
    comment TEXT NOT NULL DEFAULT '',
    repeat VARCHAR(128) NOT NULL DEFAULT ''    -- "d 7" | "y" | "w 1,5" | "m -1 2,8"
);
CREATE INDEX IF NOT EXISTS idx_scheduler_date ON scheduler (date);

CREATE TABLE IF NOT EXISTS chats (
    user_id INTEGER PRIMARY KEY,
    pwd_hash TEXT,                             -- sha256 пароля, с которым вошли
    created_at TEXT NOT NULL
);
"""


async def init_db():
    async with aiosqlite.connect(DB_PATH) as db:
        await db.executescript(SCHEMA)
        await db.commit()


@asynccontextmanager
async def db_conn():
    conn = await aiosqlite.connect(DB_PATH)
    conn.row_factory = sqlite3.Row
    try:
        yield conn
    finally:
        await conn.close()
