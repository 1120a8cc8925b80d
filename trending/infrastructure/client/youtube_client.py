import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import httplib2
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from config.settings import YouTubeSettings
from trending.application.exceptions import ChannelNotFoundError, UpstreamError, UpstreamUnavailableError
from trending.application.port.platform_client_port import PlatformClientPort
from trending.domain.catalog_item import CatalogItem
from trending.domain.channel_profile import ChannelProfile, ChannelSearchResult
from trending.domain.duration import classify_content_type
from trending.domain.trending_page import TrendingPage

logger = logging.getLogger(__name__)

GLOBAL_REGION = "GLOBAL"
MAX_RESULTS_PER_CALL = 50


class YouTubeClient(PlatformClientPort):
    platform = "youtube"

    def __init__(self, settings: YouTubeSettings, service: Any = None):
        # YouTube Data API v3 클라이언트. 응답은 여기서 바로 도메인 모델로 변환한다.
        if service is None and not settings.api_key:
            raise UpstreamUnavailableError("YOUTUBE_API_KEY is not set")
        self.settings = settings
        self.service = service or build(
            "youtube",
            "v3",
            developerKey=settings.api_key,
            cache_discovery=False,
        )

    async def fetch_trending_page(
        self,
        region_code: str,
        category_id: str | None = None,
        page_token: str | None = None,
    ) -> TrendingPage:
        params: Dict[str, Any] = {
            "part": "snippet,contentDetails,statistics",
            "chart": "mostPopular",
            "maxResults": MAX_RESULTS_PER_CALL,
        }
        # GLOBAL 은 regionCode 없이 호출한다.
        if region_code and region_code != GLOBAL_REGION:
            params["regionCode"] = region_code
        if category_id:
            params["videoCategoryId"] = category_id
        if page_token:
            params["pageToken"] = page_token

        response = await self._execute(
            self.service.videos().list(**self._with_quota(params)),
            f"trending fetch {region_code}/{category_id or 'all'}",
        )
        raw_items = response.get("items", [])
        channels = await self._fetch_channel_map(
            [item.get("snippet", {}).get("channelId") for item in raw_items]
        )
        items = [
            self._to_catalog_item(item, channels.get(item.get("snippet", {}).get("channelId")), region_code, category_id)
            for item in raw_items
            if item.get("id")
        ]
        return TrendingPage(items=items, next_page_token=response.get("nextPageToken"))

    async def fetch_channel(self, channel_id: str) -> ChannelProfile:
        response = await self._execute(
            self.service.channels().list(**self._with_quota({"part": "snippet,statistics", "id": channel_id})),
            "channel fetch",
        )
        items = response.get("items", [])
        if not items:
            raise ChannelNotFoundError(channel_id)
        snippet = items[0].get("snippet", {})
        stats = items[0].get("statistics", {})
        thumbnails = snippet.get("thumbnails", {})
        return ChannelProfile(
            channel_id=items[0].get("id", channel_id),
            title=snippet.get("title", ""),
            description=snippet.get("description"),
            custom_url=snippet.get("customUrl"),
            published_at=self._parse_datetime(snippet.get("publishedAt")),
            thumbnail_default=(thumbnails.get("default") or {}).get("url"),
            thumbnail_medium=(thumbnails.get("medium") or {}).get("url"),
            thumbnail_high=(thumbnails.get("high") or {}).get("url"),
            subscriber_count=self._to_int(stats.get("subscriberCount")),
            view_count=self._to_int(stats.get("viewCount")),
            video_count=self._to_int(stats.get("videoCount")),
        )

    async def fetch_channel_videos(self, channel_id: str, max_results: int = 50) -> List[CatalogItem]:
        channel_response = await self._execute(
            self.service.channels().list(**self._with_quota({"part": "contentDetails", "id": channel_id})),
            "channel uploads lookup",
        )
        channel_items = channel_response.get("items", [])
        if not channel_items:
            raise ChannelNotFoundError(channel_id)
        uploads = channel_items[0].get("contentDetails", {}).get("relatedPlaylists", {}).get("uploads")
        if not uploads:
            return []

        playlist_response = await self._execute(
            self.service.playlistItems().list(
                **self._with_quota(
                    {
                        "part": "contentDetails",
                        "playlistId": uploads,
                        "maxResults": min(max_results, MAX_RESULTS_PER_CALL),
                    }
                )
            ),
            "uploads playlist fetch",
        )
        video_ids = [
            item.get("contentDetails", {}).get("videoId")
            for item in playlist_response.get("items", [])
            if item.get("contentDetails", {}).get("videoId")
        ]
        if not video_ids:
            return []

        videos_response = await self._execute(
            self.service.videos().list(
                **self._with_quota({"part": "snippet,contentDetails,statistics", "id": ",".join(video_ids)})
            ),
            "channel videos fetch",
        )
        return [
            self._to_catalog_item(item, None, GLOBAL_REGION, None)
            for item in videos_response.get("items", [])
            if item.get("id")
        ]

    async def search_channels(self, query: str, max_results: int = 10) -> List[ChannelSearchResult]:
        response = await self._execute(
            self.service.search().list(
                **self._with_quota({"part": "snippet", "q": query, "type": "channel", "maxResults": max_results})
            ),
            "channel search",
        )
        results: List[ChannelSearchResult] = []
        for item in response.get("items", []):
            snippet = item.get("snippet", {})
            channel_id = snippet.get("channelId") or item.get("id", {}).get("channelId")
            if not channel_id:
                continue
            thumbnails = snippet.get("thumbnails", {})
            results.append(
                ChannelSearchResult(
                    channel_id=channel_id,
                    title=snippet.get("title", ""),
                    description=snippet.get("description"),
                    thumbnail_default=(thumbnails.get("default") or {}).get("url"),
                    thumbnail_medium=(thumbnails.get("medium") or {}).get("url"),
                    thumbnail_high=(thumbnails.get("high") or {}).get("url"),
                )
            )
        return results

    async def _fetch_channel_map(self, channel_ids: List[str | None]) -> Dict[str, dict]:
        """영상 목록의 채널 통계/썸네일을 50개 단위로 묶어 조회한다."""
        unique_ids = list(dict.fromkeys(cid for cid in channel_ids if cid))
        channels: Dict[str, dict] = {}
        for start in range(0, len(unique_ids), MAX_RESULTS_PER_CALL):
            chunk = unique_ids[start : start + MAX_RESULTS_PER_CALL]
            response = await self._execute(
                self.service.channels().list(
                    **self._with_quota(
                        {"part": "snippet,statistics", "id": ",".join(chunk), "maxResults": MAX_RESULTS_PER_CALL}
                    )
                ),
                "channel enrichment",
            )
            for item in response.get("items", []):
                channels[item["id"]] = item
        return channels

    def _to_catalog_item(
        self,
        item: dict,
        channel: dict | None,
        region_code: str,
        category_id: str | None,
    ) -> CatalogItem:
        snippet = item.get("snippet", {})
        stats = item.get("statistics", {})
        content = item.get("contentDetails", {})
        thumbnails = snippet.get("thumbnails", {})
        channel = channel or {}
        channel_stats = channel.get("statistics", {})
        duration = content.get("duration")
        return CatalogItem(
            id=item["id"],
            title=snippet.get("title", ""),
            channel_id=snippet.get("channelId", ""),
            content_type=classify_content_type(duration),
            region_code=region_code,
            category_id=category_id,
            description=snippet.get("description"),
            thumbnail_url=(
                (thumbnails.get("high") or {}).get("url")
                or (thumbnails.get("medium") or {}).get("url")
                or (thumbnails.get("default") or {}).get("url")
            ),
            channel_title=snippet.get("channelTitle"),
            channel_thumbnail_url=((channel.get("snippet", {}).get("thumbnails", {}).get("default")) or {}).get("url"),
            published_at=self._parse_datetime(snippet.get("publishedAt")),
            duration=duration,
            view_count=self._to_int(stats.get("viewCount")),
            like_count=self._to_int(stats.get("likeCount")),
            comment_count=self._to_int(stats.get("commentCount")),
            subscriber_count=self._to_int(channel_stats.get("subscriberCount")),
            video_count=self._to_int(channel_stats.get("videoCount")),
        )

    def _with_quota(self, params: Dict[str, Any]) -> Dict[str, Any]:
        if self.settings.quota_user:
            params["quotaUser"] = self.settings.quota_user
        return params

    async def _execute(self, request: Any, action: str) -> dict:
        # httplib2.Http 는 스레드 안전하지 않으므로 호출마다 새로 만든다.
        http = httplib2.Http(timeout=self.settings.timeout_seconds)
        try:
            return await asyncio.to_thread(request.execute, http=http)
        except HttpError as exc:
            raise UpstreamError(f"YouTube {action} failed: {exc}") from exc
        except (OSError, httplib2.HttpLib2Error) as exc:
            # 타임아웃, DNS 실패 등 전송 계층 오류
            raise UpstreamError(f"YouTube {action} failed: {exc!r}") from exc

    @staticmethod
    def _to_int(value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @staticmethod
    def _parse_datetime(value: str | None):
        # DB 에는 naive UTC 로 저장한다.
        if not value:
            return None
        try:
            parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
