from abc import ABC, abstractmethod

from trending.domain.catalog_item import CatalogItem
from trending.domain.channel_profile import ChannelProfile, ChannelSearchResult
from trending.domain.trending_page import TrendingPage


class PlatformClientPort(ABC):
    platform: str

    @abstractmethod
    async def fetch_trending_page(
        self,
        region_code: str,
        category_id: str | None = None,
        page_token: str | None = None,
    ) -> TrendingPage:
        """
        업스트림 인기 차트 한 페이지. 항목은 업스트림 순서 그대로이며
        content_type 은 길이 기준으로 이미 분류되어 있다.
        """
        raise NotImplementedError

    @abstractmethod
    async def fetch_channel(self, channel_id: str) -> ChannelProfile:
        raise NotImplementedError

    @abstractmethod
    async def fetch_channel_videos(self, channel_id: str, max_results: int = 50) -> list[CatalogItem]:
        raise NotImplementedError

    @abstractmethod
    async def search_channels(self, query: str, max_results: int = 10) -> list[ChannelSearchResult]:
        raise NotImplementedError
