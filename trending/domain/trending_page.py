from dataclasses import dataclass, field
from typing import Optional

from trending.domain.catalog_item import CatalogItem


@dataclass
class TrendingPage:
    # 업스트림 한 페이지(또는 여러 페이지를 모은 결과)
    items: list[CatalogItem] = field(default_factory=list)
    next_page_token: Optional[str] = None
