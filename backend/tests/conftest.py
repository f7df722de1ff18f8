"""Test fixtures for the stay quote backend."""
from __future__ import annotations

import os
from collections.abc import AsyncIterator
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import dispose_engine, get_sessionmaker
from app.main import app
from app.models import RateTierRecord, RoomType


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(db_url: str) -> AsyncIterator[None]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    get_settings.cache_clear()
    get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def rate_table(reset_database: None, db_url: str) -> dict[str, str]:
    """Seed room types and their duration tiers."""
    sessionmaker = get_sessionmaker(db_url)
    async with sessionmaker() as session:
        session.add_all(
            [
                RoomType(code="suite", display_name="Suite"),
                RoomType(code="loft", display_name="Loft", min_stay_nights=7),
                RoomType(code="annex", display_name="Annex", active=False),
            ]
        )
        await session.flush()
        session.add_all(
            [
                RateTierRecord(
                    room_code="suite",
                    min_duration_nights=8,
                    nightly_rate=Decimal("315.00"),
                ),
                RateTierRecord(
                    room_code="suite",
                    min_duration_nights=1,
                    nightly_rate=Decimal("320.00"),
                ),
                RateTierRecord(
                    room_code="loft",
                    min_duration_nights=1,
                    nightly_rate=Decimal("200.00"),
                ),
                RateTierRecord(
                    room_code="annex",
                    min_duration_nights=1,
                    nightly_rate=Decimal("90.00"),
                ),
            ]
        )
        await session.commit()
    return {"room_code": "suite", "min_stay_room_code": "loft"}


@pytest_asyncio.fixture()
async def app_context(
    rate_table: dict[str, str], db_url: str
) -> AsyncIterator[dict[str, object]]:
    """Yield an async client against a seeded rate table."""
    context: dict[str, object] = dict(rate_table)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        context["client"] = client
        yield context
