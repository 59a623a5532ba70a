import pytest

from planner import db


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def tmp_db(tmp_path, monkeypatch):
    path = str(tmp_path / "scheduler.db")
    monkeypatch.setattr(db, "DB_PATH", path)
    await db.init_db()
    yield path
