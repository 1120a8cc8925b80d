from caching.domain.cache_key import CacheKey, CacheTTL
from caching.infrastructure.redis_cache import RedisCache
from trending.application.exceptions import InvalidParameterError
from trending.application.port.platform_client_port import PlatformClientPort
from trending.domain.analytics import (
    DEFAULT_HIDDEN_GEM_THRESHOLD,
    avg_views_per_video,
    channel_performance_score,
    engagement_rate,
    find_hidden_gems,
    sort_items,
    views_per_subscriber,
)

CHANNEL_VIDEO_LIMIT = 50
TOP_VIDEO_LIMIT = 10
HIDDEN_GEM_LIMIT = 10
SEARCH_LIMIT = 10


class ChannelAnalysisUseCase:
    def __init__(self, client: PlatformClientPort, cache: RedisCache):
        # 채널 성과표(분석/상위 영상/히든 젬/점수)와 채널 검색을 담당한다.
        self.client = client
        self.cache = cache

    async def analyze_channel(self, channel_id: str | None) -> dict:
        if not channel_id or not channel_id.strip():
            raise InvalidParameterError("Channel ID is required")
        channel_id = channel_id.strip()

        async def produce() -> dict:
            # 채널이 없으면 ChannelNotFoundError 가 그대로 올라가며 캐시에 저장되지 않는다.
            profile = await self.client.fetch_channel(channel_id)
            videos = await self.client.fetch_channel_videos(channel_id, CHANNEL_VIDEO_LIMIT)

            per_subscriber = views_per_subscriber(profile.view_count, profile.subscriber_count)
            per_video = avg_views_per_video(profile.view_count, profile.video_count)
            rates = [engagement_rate(v.like_count, v.comment_count, v.view_count) for v in videos]
            avg_engagement = sum(rates) / len(rates) if rates else 0.0

            hidden_gems = find_hidden_gems(videos, profile.subscriber_count, DEFAULT_HIDDEN_GEM_THRESHOLD)
            performance = channel_performance_score(
                per_subscriber, per_video, profile.video_count, profile.view_count
            )
            top_videos = sort_items(videos, "views")[:TOP_VIDEO_LIMIT]

            return {
                "channel": profile.to_dict(),
                "analytics": {
                    "viewsPerSubscriber": per_subscriber,
                    "avgViewsPerVideo": per_video,
                    "engagementRate": avg_engagement,
                },
                "topVideos": [
                    {
                        "id": video.id,
                        "title": video.title,
                        "viewCount": video.view_count,
                        "likeCount": video.like_count,
                        "commentCount": video.comment_count,
                        "engagementRate": engagement_rate(video.like_count, video.comment_count, video.view_count),
                        "publishedAt": video.to_dict()["publishedAt"],
                    }
                    for video in top_videos
                ],
                "hiddenGems": [gem.to_dict() for gem in hidden_gems[:HIDDEN_GEM_LIMIT]],
                "performance": performance.to_dict(),
            }

        return await self.cache.with_cache(CacheKey.channel(channel_id), produce, CacheTTL.CHANNEL)

    async def search_channels(self, query: str | None) -> dict:
        if not query or not query.strip():
            raise InvalidParameterError("Search query is required")
        query = query.strip()

        async def produce() -> dict:
            results = await self.client.search_channels(query, SEARCH_LIMIT)
            return {"channels": [result.to_dict() for result in results]}

        return await self.cache.with_cache(CacheKey.search_channels(query), produce, CacheTTL.SEARCH)
