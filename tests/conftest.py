from __future__ import annotations

import os
import tempfile
from pathlib import Path

_TEST_DB_PATH = Path(tempfile.mkdtemp(prefix="millionaire-tests-")) / "millionaire_test.db"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_PATH}"
os.environ["APP_ENV"] = "test"

import pytest  # noqa: E402

import millionaire.db.models  # noqa: E402,F401
from millionaire.db.models.base import Base  # noqa: E402
from millionaire.db.session import engine  # noqa: E402


@pytest.fixture
async def db() -> None:
    # Dispose pooled connections between tests to avoid cross-event-loop reuse.
    await engine.dispose()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()
