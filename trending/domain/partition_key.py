from dataclasses import dataclass
from itertools import product
from typing import Iterable, Optional

from trending.domain.content_type import ContentType


@dataclass(frozen=True)
class PartitionKey:
    region_code: str
    category_id: Optional[str]
    content_type: ContentType

    @property
    def label(self) -> str:
        return f"{self.region_code}/{self.category_id or 'all'}/{self.content_type.value}"


def enumerate_partitions(
    regions: Iterable[str],
    categories: Iterable[Optional[str]],
    content_types: Iterable[ContentType] = (ContentType.SHORT, ContentType.LONG),
) -> list[PartitionKey]:
    """
    지역 × 카테고리 × 콘텐츠 타입의 전체 조합을 만든다.
    categories 에 None(전체) 이 없으면 맨 앞에 추가한다.
    """
    category_list: list[Optional[str]] = list(categories)
    if None not in category_list:
        category_list.insert(0, None)
    return [
        PartitionKey(region_code=region, category_id=category, content_type=content_type)
        for region, category, content_type in product(regions, category_list, content_types)
    ]
