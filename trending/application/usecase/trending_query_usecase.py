from collections import Counter
from datetime import date

from caching.domain.cache_key import CacheKey, CacheTTL
from caching.infrastructure.redis_cache import RedisCache
from trending.application.exceptions import UpstreamUnavailableError
from trending.application.port.trending_repository_port import TrendingRepositoryPort
from trending.application.usecase.trending_fetch_usecase import TrendingFetchUseCase
from trending.domain.analytics import (
    DEFAULT_HIDDEN_GEM_THRESHOLD,
    engagement_rate,
    is_hidden_gem,
    sort_items,
    views_per_subscriber,
)
from trending.domain.content_type import ContentType
from trending.domain.partition_key import PartitionKey
from trending.domain.period import PeriodFilter, resolve_period_window
from trending.domain.ranked_snapshot_row import RankedSnapshotRow

HOME_SECTION_SIZE = 5
LATEST_TRENDING_SIZE = 20


def _row_item(row: RankedSnapshotRow):
    return row.item


def _unique_videos(rows: list[RankedSnapshotRow]) -> list[RankedSnapshotRow]:
    # 같은 영상이 여러 카테고리 파티션에 중복 저장될 수 있다.
    seen: set[str] = set()
    unique = []
    for row in rows:
        if row.item.id in seen:
            continue
        seen.add(row.item.id)
        unique.append(row)
    return unique


def _video_summary(row: RankedSnapshotRow) -> dict:
    item = row.item
    return {
        "id": item.id,
        "title": item.title,
        "thumbnailUrl": item.thumbnail_url,
        "channelId": item.channel_id,
        "channelTitle": item.channel_title,
        "channelThumbnailUrl": item.channel_thumbnail_url,
        "viewCount": item.view_count,
        "subscriberCount": item.subscriber_count,
        "engagementRate": row.engagement_rate,
    }


def _channel_summary(row: RankedSnapshotRow) -> dict:
    item = row.item
    return {
        "id": item.channel_id,
        "title": item.channel_title,
        "thumbnailUrl": item.channel_thumbnail_url,
        "subscriberCount": item.subscriber_count,
        "videoCount": item.video_count,
    }


class TrendingQueryUseCase:
    def __init__(
        self,
        repository: TrendingRepositoryPort,
        cache: RedisCache,
        fetcher: TrendingFetchUseCase | None = None,
    ):
        # 스냅샷 조회(배치 저장본)와 실시간 인기 차트 조회를 담당한다. 모든 조회는 캐시를 거친다.
        self.repository = repository
        self.cache = cache
        self.fetcher = fetcher

    async def get_partition(
        self,
        region_code: str,
        category_id: str | None,
        content_type: ContentType,
        period: PeriodFilter = PeriodFilter.ALL,
        anchor: date | None = None,
    ) -> dict:
        """
        배치가 저장한 파티션을 rank 오름차순으로 돌려준다. 조회 시 재정렬하지 않는다.
        행이 없으면 빈 목록을 돌려준다.
        """
        period = PeriodFilter(period)
        partition = PartitionKey(region_code=region_code, category_id=category_id, content_type=content_type)
        key = CacheKey.snapshot(
            content_type.value,
            region_code,
            category_id,
            period.value,
            anchor.isoformat() if anchor else None,
        )

        async def produce() -> dict:
            window = resolve_period_window(period, anchor=anchor)
            rows = await self.repository.find_partition(partition, window=window)
            return {
                "regionCode": region_code,
                "categoryId": category_id,
                "contentType": content_type.value,
                "period": period.value,
                "items": [row.to_dict() for row in rows],
                "total": len(rows),
            }

        return await self.cache.with_cache(key, produce, CacheTTL.TRENDING)

    async def get_live_trending(
        self,
        region_code: str,
        category_id: str | None,
        content_type: ContentType,
        page_token: str | None = None,
    ) -> dict:
        """배치를 거치지 않고 업스트림 인기 차트를 바로 조회한다."""
        if self.fetcher is None:
            raise UpstreamUnavailableError("Upstream client is not configured")

        key_builder = CacheKey.trending_shorts if content_type is ContentType.SHORT else CacheKey.trending_videos
        key = key_builder(region_code, category_id, page_token)

        async def produce() -> dict:
            page = await self.fetcher.fetch(
                region_code, category_id, content_type, page_token=page_token, finish_page=True
            )
            items = []
            for item in page.items:
                payload = item.to_dict()
                payload["engagementRate"] = engagement_rate(item.like_count, item.comment_count, item.view_count)
                items.append(payload)
            return {
                "items": items,
                "region": region_code,
                "total": len(items),
                "nextPageToken": page.next_page_token,
            }

        return await self.cache.with_cache(key, produce, CacheTTL.TRENDING)

    async def get_home_rankings(
        self,
        content_type: ContentType,
        period: PeriodFilter = PeriodFilter.ALL,
        region_code: str = "GLOBAL",
        anchor: date | None = None,
    ) -> dict:
        period = PeriodFilter(period)
        key = CacheKey.home_rankings(
            content_type.value, region_code, period.value, anchor.isoformat() if anchor else None
        )

        async def produce() -> dict:
            window = resolve_period_window(period, anchor=anchor)
            rows = await self.repository.find_rows(region_code, content_type, window=window)
            return {
                "contentType": content_type.value,
                "regionCode": region_code,
                "period": period.value,
                "rankings": self._build_rankings(rows),
            }

        return await self.cache.with_cache(key, produce, CacheTTL.TRENDING)

    @staticmethod
    def _build_rankings(rows: list[RankedSnapshotRow]) -> dict:
        videos = _unique_videos(rows)

        top_videos = sort_items(videos, "views", item_getter=_row_item)[:HOME_SECTION_SIZE]

        rising = [
            row
            for row in sort_items(videos, "ratio", item_getter=_row_item)
            if is_hidden_gem(
                views_per_subscriber(row.item.view_count, row.item.subscriber_count),
                DEFAULT_HIDDEN_GEM_THRESHOLD,
            )
        ][:HOME_SECTION_SIZE]

        high_engagement = sort_items(videos, "engagement", item_getter=_row_item)[:HOME_SECTION_SIZE]

        top_channels = []
        seen_channels: set[str] = set()
        for row in sorted(rows, key=lambda value: value.item.subscriber_count, reverse=True):
            if row.item.channel_id in seen_channels:
                continue
            seen_channels.add(row.item.channel_id)
            top_channels.append(row)
            if len(top_channels) >= HOME_SECTION_SIZE:
                break

        first_row_by_channel: dict[str, RankedSnapshotRow] = {}
        for row in videos:
            first_row_by_channel.setdefault(row.item.channel_id, row)
        trending_counts = Counter(row.item.channel_id for row in videos)
        active_channels = [
            {**_channel_summary(first_row_by_channel[channel_id]), "trendingCount": count}
            for channel_id, count in trending_counts.most_common(HOME_SECTION_SIZE)
        ]

        latest = sorted(videos, key=lambda value: value.collected_at, reverse=True)[:LATEST_TRENDING_SIZE]

        return {
            "topVideos": [_video_summary(row) for row in top_videos],
            "risingVideos": [
                {
                    **_video_summary(row),
                    "ratio": views_per_subscriber(row.item.view_count, row.item.subscriber_count),
                }
                for row in rising
            ],
            "highEngagement": [_video_summary(row) for row in high_engagement],
            "topChannels": [_channel_summary(row) for row in top_channels],
            "activeChannels": active_channels,
            "latestTrending": [
                {
                    "id": row.item.id,
                    "title": row.item.title,
                    "thumbnailUrl": row.item.thumbnail_url,
                    "channelTitle": row.item.channel_title,
                    "viewCount": row.item.view_count,
                }
                for row in latest
            ],
        }
