import fnmatch
from datetime import datetime

from trending.application.exceptions import ChannelNotFoundError, UpstreamError
from trending.application.port.platform_client_port import PlatformClientPort
from trending.domain.catalog_item import CatalogItem
from trending.domain.channel_profile import ChannelProfile, ChannelSearchResult
from trending.domain.content_type import ContentType
from trending.domain.trending_page import TrendingPage


def make_item(
    item_id: str = "vid-1",
    content_type: ContentType = ContentType.SHORT,
    region_code: str = "KR",
    category_id: str | None = None,
    view_count: int = 1000,
    like_count: int = 50,
    comment_count: int = 10,
    subscriber_count: int = 100,
    channel_id: str = "UC-1",
    published_at: datetime | None = datetime(2024, 1, 1, 12, 0),
    **overrides,
) -> CatalogItem:
    values = dict(
        id=item_id,
        title=f"title {item_id}",
        channel_id=channel_id,
        content_type=content_type,
        region_code=region_code,
        category_id=category_id,
        channel_title=f"channel {channel_id}",
        published_at=published_at,
        duration="PT30S" if content_type is ContentType.SHORT else "PT10M",
        view_count=view_count,
        like_count=like_count,
        comment_count=comment_count,
        subscriber_count=subscriber_count,
        video_count=10,
    )
    values.update(overrides)
    return CatalogItem(**values)


class FakeRedis:
    """redis.asyncio.Redis 중 캐시 계층이 쓰는 명령만 흉내 낸다."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_get = False
        self.fail_set = False
        self.get_calls = 0
        self.delete_calls = 0
        self.closed = False

    async def get(self, key):
        self.get_calls += 1
        if self.fail_get:
            raise ConnectionError("redis is down")
        return self.store.get(key)

    async def setex(self, key, ttl, value):
        if self.fail_set:
            raise ConnectionError("redis is down")
        self.store[key] = value
        self.ttls[key] = ttl
        return True

    async def scan_iter(self, match=None, count=None):
        for key in list(self.store):
            if match is None or fnmatch.fnmatchcase(key, match):
                yield key

    async def delete(self, *keys):
        self.delete_calls += 1
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed

    async def ping(self):
        return True

    async def dbsize(self):
        return len(self.store)

    async def info(self, section=None):
        return {"used_memory_human": "1.02M"}

    async def aclose(self):
        self.closed = True


class FakePlatformClient(PlatformClientPort):
    platform = "fake"

    def __init__(
        self,
        items_per_type: int = 3,
        failing_regions: tuple[str, ...] = (),
        empty_regions: tuple[str, ...] = (),
        pages: dict | None = None,
        channel: ChannelProfile | None = None,
        channel_videos: list[CatalogItem] | None = None,
        search_results: list[ChannelSearchResult] | None = None,
    ):
        self.items_per_type = items_per_type
        self.failing_regions = failing_regions
        self.empty_regions = empty_regions
        self.pages = pages
        self.channel = channel
        self.channel_videos = channel_videos or []
        self.search_results = search_results or []
        self.trending_calls: list[tuple] = []
        self.channel_calls = 0
        self.search_calls = 0

    async def fetch_trending_page(self, region_code, category_id=None, page_token=None):
        self.trending_calls.append((region_code, category_id, page_token))
        if region_code in self.failing_regions:
            raise UpstreamError(f"quota exceeded for {region_code}")
        if self.pages is not None:
            return self.pages[page_token]
        if region_code in self.empty_regions:
            return TrendingPage(items=[], next_page_token=None)
        items = []
        for content_type in (ContentType.SHORT, ContentType.LONG):
            for index in range(self.items_per_type):
                items.append(
                    make_item(
                        item_id=f"{region_code}-{category_id or 'all'}-{content_type.value}-{index}",
                        content_type=content_type,
                        region_code=region_code,
                        category_id=category_id,
                        view_count=1000 * (index + 1),
                    )
                )
        return TrendingPage(items=items, next_page_token=None)

    async def fetch_channel(self, channel_id):
        self.channel_calls += 1
        if self.channel is None or self.channel.channel_id != channel_id:
            raise ChannelNotFoundError(channel_id)
        return self.channel

    async def fetch_channel_videos(self, channel_id, max_results=50):
        return list(self.channel_videos)[:max_results]

    async def search_channels(self, query, max_results=10):
        self.search_calls += 1
        return list(self.search_results)[:max_results]
