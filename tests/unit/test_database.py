"""
Tests for Database Session Management
"""

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncSession

from teachassist.core.database import engine, get_db, init_db


class TestGetDb:
    """Test the request-scoped session dependency."""

    async def test_yields_session(self) -> None:
        gen = get_db()
        session = await gen.__anext__()

        assert isinstance(session, AsyncSession)
        assert (await session.execute(text("SELECT 1"))).scalar() == 1

        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()

    async def test_rolls_back_on_error(self) -> None:
        gen = get_db()
        await gen.__anext__()

        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("handler failed"))


async def test_init_db_creates_tables() -> None:
    await init_db()

    async with engine.connect() as conn:
        tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())

    assert {"users", "calendar_events", "resources", "quizzes"} <= set(tables)
