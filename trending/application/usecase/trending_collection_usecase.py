import asyncio
import logging
import time
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterable, Sequence

from caching.domain.cache_key import CacheKey
from caching.infrastructure.redis_cache import RedisCache
from trending.application.port.trending_repository_port import TrendingRepositoryPort
from trending.application.usecase.trending_fetch_usecase import TrendingFetchUseCase
from trending.domain.analytics import engagement_rate
from trending.domain.batch_report import BatchReport, BatchRunStatus
from trending.domain.catalog_item import CatalogItem
from trending.domain.partition_key import PartitionKey
from trending.domain.period import utc_now
from trending.domain.ranked_snapshot_row import RankedSnapshotRow

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 3


def build_snapshot_rows(
    partition: PartitionKey,
    items: Sequence[CatalogItem],
    collected_at: datetime,
) -> list[RankedSnapshotRow]:
    """업스트림 순서대로 rank = index + 1 을 매기고 참여율을 계산한다."""
    rows = []
    for index, item in enumerate(items):
        item = replace(
            item,
            region_code=partition.region_code,
            category_id=partition.category_id,
            content_type=partition.content_type,
        )
        rows.append(
            RankedSnapshotRow(
                item=item,
                engagement_rate=engagement_rate(item.like_count, item.comment_count, item.view_count),
                rank=index + 1,
                collected_at=collected_at,
            )
        )
    return rows


class TrendingCollectionUseCase:
    """
    지역 × 카테고리 × 콘텐츠 타입 전체 파티션을 돌며 인기 영상 스냅샷을 갱신한다.

    - 파티션마다 수집 → 변환 → 교체(삭제 후 삽입) 순서로 처리한다.
    - 한 파티션의 실패는 기록만 하고 다음 파티션을 계속 처리한다. 재시도는 없다.
    - collected_at 은 실행 시작 시 한 번만 잡아 모든 파티션이 같은 시점을 갖는다.
    """

    def __init__(
        self,
        fetcher: TrendingFetchUseCase,
        repository: TrendingRepositoryPort,
        partitions: Iterable[PartitionKey],
        concurrency: int = DEFAULT_CONCURRENCY,
        cache: RedisCache | None = None,
        invalidate_cache: bool = False,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.fetcher = fetcher
        self.repository = repository
        self.partitions = list(partitions)
        self.concurrency = max(1, concurrency)
        self.cache = cache
        self.invalidate_cache = invalidate_cache
        self.clock = clock
        self.status = BatchRunStatus.IDLE

    async def run(self) -> BatchReport:
        started = time.perf_counter()
        collected_at = self.clock()
        report = BatchReport(collected_at=collected_at, total_partitions=len(self.partitions))
        self.status = BatchRunStatus.RUNNING
        logger.info(
            "[TRENDING-BATCH] run started | partitions=%d concurrency=%d",
            len(self.partitions),
            self.concurrency,
        )

        semaphore = asyncio.Semaphore(self.concurrency)

        async def worker(partition: PartitionKey) -> None:
            async with semaphore:
                await self._collect_into_report(partition, collected_at, report)

        await asyncio.gather(*(worker(partition) for partition in self.partitions))

        if self.invalidate_cache and self.cache is not None:
            for pattern in CacheKey.SNAPSHOT_PATTERNS:
                await self.cache.invalidate(pattern)

        report.finish(duration_ms=int((time.perf_counter() - started) * 1000))
        self.status = report.status
        logger.info(
            "[TRENDING-BATCH] run finished | collected=%d errors=%d duration_ms=%d",
            report.total_collected,
            report.total_errors,
            report.duration_ms,
        )
        return report

    async def _collect_into_report(self, partition: PartitionKey, collected_at: datetime, report: BatchReport) -> None:
        stage = "fetching"
        try:
            page = await self.fetcher.fetch(partition.region_code, partition.category_id, partition.content_type)
            stage = "transforming"
            rows = build_snapshot_rows(partition, page.items, collected_at)
            stage = "replacing"
            stored = await self.repository.replace_partition(partition, rows)
        except Exception as exc:  # pylint: disable=broad-except
            # 파티션 단위 실패 격리: 다음 주기 실행에서 자연 복구된다.
            message = f"Failed to collect {partition.label} while {stage}: {exc}"
            logger.error("[TRENDING-BATCH] %s", message)
            report.record_failure(message)
            return

        report.record_success(stored)
        logger.info("[TRENDING-BATCH] collected %d rows for %s", stored, partition.label)
