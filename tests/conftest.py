"""Pytest configuration and shared fixtures."""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import async_sessionmaker

from tests.fakes import make_authority
from tests.sql_support import create_schema, seed_routing_catalog, sqlite_engine


@pytest.fixture
def zone_authorities():
    """Authority A serves Zone 1, B serves Zone 2, both in city 1."""
    return [
        make_authority(1, city_id=1, region="Zone 1", name="Authority A"),
        make_authority(2, city_id=1, region="Zone 2", name="Authority B"),
    ]


@pytest_asyncio.fixture
async def sql_engine():
    engine = sqlite_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(sql_engine):
    """Session factory over a seeded routing catalog."""
    factory = async_sessionmaker(sql_engine, expire_on_commit=False)
    await seed_routing_catalog(factory)
    return factory
