# tests/integration/conftest.py
"""Integration test fixtures - real SQLAlchemy repository on in-memory SQLite"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from leadcrm.database import Base
from leadcrm.models import Lead
from leadcrm.services.enrichment_engine import LeadRepository


@pytest_asyncio.fixture
async def session_factory():
    """Fresh schema per test"""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def repository(session_factory):
    return LeadRepository(session_factory)


@pytest.fixture
def add_leads(session_factory):
    """Insert leads: ``await add_leads(Lead(...), ...)``"""
    async def _add(*leads: Lead):
        async with session_factory() as session:
            session.add_all(leads)
            await session.commit()
    return _add
