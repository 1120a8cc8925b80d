import logging

from trending.application.port.platform_client_port import PlatformClientPort
from trending.domain.content_type import ContentType
from trending.domain.trending_page import TrendingPage

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
DEFAULT_MAX_PAGES = 10


class TrendingFetchUseCase:
    def __init__(
        self,
        client: PlatformClientPort,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_pages: int = DEFAULT_MAX_PAGES,
    ):
        # 인기 차트를 페이지 단위로 넘기며 원하는 콘텐츠 타입만 page_size 개까지 모은다.
        self.client = client
        self.page_size = page_size
        self.max_pages = max_pages

    async def fetch(
        self,
        region_code: str,
        category_id: str | None,
        content_type: ContentType,
        page_token: str | None = None,
        finish_page: bool = False,
    ) -> TrendingPage:
        """
        업스트림 순서를 그대로 유지한다 (재정렬 없음).
        max_pages 를 넘겨 페이지를 요청하지 않는다.

        finish_page 가 True 이면 page_size 에 도달해도 현재 업스트림 페이지는 끝까지 담는다.
        돌려주는 next_page_token 으로 이어 읽을 때 빠지는 항목이 없도록 live 조회에서 쓴다.
        """
        collected = []
        seen: set[str] = set()
        token = page_token
        pages = 0

        while pages < self.max_pages:
            page = await self.client.fetch_trending_page(region_code, category_id, token)
            pages += 1
            for item in page.items:
                if item.content_type != content_type or item.id in seen:
                    continue
                seen.add(item.id)
                collected.append(item)
                if not finish_page and len(collected) >= self.page_size:
                    break
            token = page.next_page_token
            if len(collected) >= self.page_size or not token:
                break

        logger.debug(
            "[TRENDING-FETCH] %s/%s/%s collected=%d pages=%d",
            region_code,
            category_id or "all",
            content_type.value,
            len(collected),
            pages,
        )
        return TrendingPage(items=collected, next_page_token=token)
