import logging

import redis.asyncio as redis

from config.settings import RedisSettings

logger = logging.getLogger(__name__)


def build_redis_client(settings: RedisSettings) -> redis.Redis | None:
    """
    REDIS_URL 이 없으면 None 을 돌려 캐시를 끈다.
    from_url 은 지연 연결이므로 서버가 내려가 있어도 여기서는 실패하지 않는다.
    """
    if not settings.url:
        logger.warning("[CACHE] REDIS_URL is not set. Caching is disabled.")
        return None

    return redis.from_url(
        settings.url,
        decode_responses=True,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
    )
