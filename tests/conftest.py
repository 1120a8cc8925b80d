import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from caching.infrastructure.redis_cache import RedisCache
from config.database.session import build_session_factory, init_db_schema
from trending.infrastructure.repository.trending_repository_impl import TrendingRepositoryImpl

from factories import FakePlatformClient, FakeRedis


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def repository(session_factory):
    return TrendingRepositoryImpl(session_factory)


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def cache(fake_redis):
    return RedisCache(fake_redis)


@pytest.fixture
def disabled_cache():
    return RedisCache(None)


@pytest.fixture
def platform_client():
    return FakePlatformClient()
