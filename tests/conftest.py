"""Shared pytest fixtures.

Settings are required at import time by the Celery app, so safe local
defaults are placed in the environment before any storefront module is
imported.
"""

import os

os.environ.setdefault("POSTGRES_HOST", "localhost")
os.environ.setdefault("POSTGRES_USER", "testuser")
os.environ.setdefault("POSTGRES_PASSWORD", "testpass")
os.environ.setdefault("POSTGRES_DB", "testdb")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from collections.abc import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tests.factories import Storefront, build_storefront, create_sqlite_engine, create_schema


@pytest_asyncio.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory database per test."""
    engine = create_sqlite_engine()
    await create_schema(engine)
    try:
        yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def storefront(session_maker: async_sessionmaker[AsyncSession]) -> Storefront:
    return build_storefront(session_maker)
