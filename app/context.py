import logging
from dataclasses import dataclass

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from caching.infrastructure.redis_cache import RedisCache
from config.database.session import build_engine, build_session_factory
from config.redis_client import build_redis_client
from config.settings import Settings
from trending.application.exceptions import UpstreamUnavailableError
from trending.application.port.platform_client_port import PlatformClientPort
from trending.application.port.trending_repository_port import TrendingRepositoryPort
from trending.application.usecase.channel_analysis_usecase import ChannelAnalysisUseCase
from trending.application.usecase.trending_collection_usecase import TrendingCollectionUseCase
from trending.application.usecase.trending_fetch_usecase import TrendingFetchUseCase
from trending.application.usecase.trending_query_usecase import TrendingQueryUseCase
from trending.domain.partition_key import enumerate_partitions
from trending.infrastructure.client.youtube_client import YouTubeClient
from trending.infrastructure.repository.trending_repository_impl import TrendingRepositoryImpl

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """
    기동 시 1회 만들어 라우터/배치에 주입하는 공용 자원 묶음.
    platform_client 가 None 이면 업스트림 의존 기능만 실패하고 나머지는 동작한다.
    """
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker
    cache: RedisCache
    repository: TrendingRepositoryPort
    platform_client: PlatformClientPort | None = None

    def require_platform_client(self) -> PlatformClientPort:
        if self.platform_client is None:
            raise UpstreamUnavailableError("Upstream client is not configured (YOUTUBE_API_KEY)")
        return self.platform_client

    def fetcher(self) -> TrendingFetchUseCase:
        return TrendingFetchUseCase(
            self.require_platform_client(),
            page_size=self.settings.batch.page_size,
            max_pages=self.settings.batch.max_pages,
        )

    def query_usecase(self) -> TrendingQueryUseCase:
        fetcher = self.fetcher() if self.platform_client is not None else None
        return TrendingQueryUseCase(self.repository, self.cache, fetcher)

    def channel_usecase(self) -> ChannelAnalysisUseCase:
        return ChannelAnalysisUseCase(self.require_platform_client(), self.cache)

    def collection_usecase(self) -> TrendingCollectionUseCase:
        batch = self.settings.batch
        return TrendingCollectionUseCase(
            fetcher=self.fetcher(),
            repository=self.repository,
            partitions=enumerate_partitions(batch.regions, batch.categories),
            concurrency=batch.concurrency,
            cache=self.cache,
            invalidate_cache=batch.invalidate_cache,
        )

    async def aclose(self) -> None:
        await self.cache.aclose()
        await self.engine.dispose()


def build_platform_client(settings: Settings) -> PlatformClientPort | None:
    try:
        return YouTubeClient(settings.youtube)
    except UpstreamUnavailableError as exc:
        logger.warning("[APP] YouTube client disabled: %s", exc)
        return None


def build_app_context(settings: Settings | None = None) -> AppContext:
    settings = settings or Settings()
    engine = build_engine(settings.database)
    session_factory = build_session_factory(engine)
    return AppContext(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        cache=RedisCache(build_redis_client(settings.redis)),
        repository=TrendingRepositoryImpl(session_factory),
        platform_client=build_platform_client(settings),
    )


def get_app_context(request: Request) -> AppContext:
    return request.app.state.context
