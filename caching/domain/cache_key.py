from urllib.parse import quote


class CacheTTL:
    """질의 종류별 TTL(초). 엔트리마다 따로 정하지 않는다."""

    TRENDING = 5 * 60
    CHANNEL = 10 * 60
    SEARCH = 15 * 60


def build_cache_key(*segments) -> str:
    """
    세그먼트를 ':' 로 이어 붙인다. None/빈 문자열 세그먼트는 생략한다.
    """
    return ":".join(str(segment) for segment in segments if segment is not None and segment != "")


class CacheKey:
    @staticmethod
    def trending_shorts(region_code: str, category_id: str | None = None, page_token: str | None = None) -> str:
        return build_cache_key("youtube", "trending", "shorts", region_code, category_id, page_token)

    @staticmethod
    def trending_videos(region_code: str, category_id: str | None = None, page_token: str | None = None) -> str:
        return build_cache_key("youtube", "trending", "videos", region_code, category_id, page_token)

    @staticmethod
    def channel(channel_id: str) -> str:
        return build_cache_key("youtube", "channel", channel_id)

    @staticmethod
    def search_channels(query: str) -> str:
        return build_cache_key("youtube", "search", "channels", quote(query, safe=""))

    @staticmethod
    def snapshot(
        content_type: str,
        region_code: str,
        category_id: str | None = None,
        period: str = "all",
        anchor: str | None = None,
    ) -> str:
        return build_cache_key("trending", "snapshot", content_type, region_code, category_id, period, anchor)

    @staticmethod
    def home_rankings(content_type: str, region_code: str, period: str = "all", anchor: str | None = None) -> str:
        return build_cache_key("trending", "home", content_type, region_code, period, anchor)

    # 배치 갱신 후 무효화 대상 (DB 스냅샷 기반 조회)
    SNAPSHOT_PATTERNS = ("trending:snapshot:*", "trending:home:*")
