import asyncio
import json
import logging
import re
from typing import Any, Awaitable, Callable, TypeVar

import redis.asyncio as redis

logger = logging.getLogger(__name__)

T = TypeVar("T")

SCAN_BATCH_SIZE = 100


class RedisCache:
    """
    읽기 관통(read-through) 캐시.

    - client 가 None 이면 캐시 비활성화 상태로 producer 를 바로 호출한다.
    - GET 실패는 캐시 미스로 취급한다. 캐시 오류가 요청을 실패시키지 않는다.
    - 미스 시 결과를 먼저 돌려주고 SETEX 는 백그라운드 태스크로 처리한다.
    """

    def __init__(self, client: redis.Redis | None):
        self.client = client
        self._pending_writes: set[asyncio.Task] = set()

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def with_cache(self, key: str, producer: Callable[[], Awaitable[T]], ttl_seconds: int) -> T:
        if self.client is None:
            logger.debug("[CACHE] disabled, fetching directly: %s", key)
            return await producer()

        try:
            cached = await self.client.get(key)
        except Exception as exc:  # pylint: disable=broad-except
            logger.warning("[CACHE] GET failed for %s, falling back to producer: %s", key, exc)
            return await producer()

        if cached is not None:
            try:
                value = json.loads(cached)
            except (TypeError, ValueError) as exc:
                logger.warning("[CACHE] corrupt entry for %s, treating as miss: %s", key, exc)
            else:
                logger.debug("[CACHE] HIT: %s", key)
                return value

        logger.debug("[CACHE] MISS: %s", key)
        data = await producer()
        self._schedule_write(key, ttl_seconds, data)
        return data

    def _schedule_write(self, key: str, ttl_seconds: int, data: Any) -> None:
        try:
            payload = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            logger.error("[CACHE] value for %s is not JSON serializable: %s", key, exc)
            return

        task = asyncio.create_task(self._write(key, ttl_seconds, payload))
        # 참조를 잡아 두지 않으면 태스크가 GC 될 수 있다.
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write(self, key: str, ttl_seconds: int, payload: str) -> None:
        try:
            await self.client.setex(key, ttl_seconds, payload)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("[CACHE] failed to set cache for key %s: %s", key, exc)

    async def drain(self) -> None:
        """진행 중인 백그라운드 쓰기를 모두 기다린다."""
        if self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def invalidate(self, pattern: str) -> int:
        """
        glob 패턴과 일치하는 키를 SCAN 커서로 순회하며 배치 단위로 삭제한다.
        """
        if self.client is None:
            logger.warning("[CACHE] disabled, cannot invalidate %s", pattern)
            return 0

        deleted = 0
        batch: list[str] = []
        try:
            async for key in self.client.scan_iter(match=pattern, count=SCAN_BATCH_SIZE):
                batch.append(key)
                if len(batch) >= SCAN_BATCH_SIZE:
                    deleted += await self.client.delete(*batch)
                    batch = []
            if batch:
                deleted += await self.client.delete(*batch)
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("[CACHE] error invalidating pattern %s: %s", pattern, exc)
            return deleted

        logger.info("[CACHE] invalidated %d keys matching %s", deleted, pattern)
        return deleted

    async def stats(self) -> dict:
        if self.client is None:
            return {"connected": False}
        try:
            if not await self.client.ping():
                return {"connected": False}
            key_count = await self.client.dbsize()
            memory_used = _extract_memory_used(await self.client.info("memory"))
        except Exception as exc:  # pylint: disable=broad-except
            logger.error("[CACHE] error getting cache stats: %s", exc)
            return {"connected": False}
        return {"connected": True, "keyCount": key_count, "memoryUsed": memory_used}

    async def aclose(self) -> None:
        await self.drain()
        if self.client is not None:
            await self.client.aclose()


def _extract_memory_used(info: Any) -> str:
    if isinstance(info, dict):
        return str(info.get("used_memory_human", "unknown"))
    match = re.search(r"used_memory_human:(\S+)", str(info or ""))
    return match.group(1) if match else "unknown"
