from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config.settings import DatabaseSettings

Base = declarative_base()


def build_engine(settings: DatabaseSettings, **kwargs) -> AsyncEngine:
    """
    설정값으로 비동기 SQLAlchemy 엔진을 만듭니다.
    기동 시 1회 생성하여 AppContext 에 보관합니다.
    """
    return create_async_engine(
        settings.url,
        echo=settings.echo,
        pool_pre_ping=True,
        **kwargs,
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


async def init_db_schema(engine: AsyncEngine) -> None:
    """
    애플리케이션 기동 시 테이블이 없을 경우를 대비해 스키마를 생성합니다.
    """
    # 모델 등록을 위해 import 해 둔다.
    from trending.infrastructure.orm import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
