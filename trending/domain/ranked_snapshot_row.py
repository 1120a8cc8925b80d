from dataclasses import dataclass
from datetime import datetime

from trending.domain.catalog_item import CatalogItem, isoformat
from trending.domain.partition_key import PartitionKey


@dataclass
class RankedSnapshotRow:
    """
    배치 1회 실행 결과로 저장되는 파티션 내 순위 행.
    제자리 갱신 없이 다음 실행에서 파티션 단위로 삭제 후 재삽입된다.
    """
    item: CatalogItem
    engagement_rate: float
    rank: int
    collected_at: datetime

    @property
    def partition(self) -> PartitionKey:
        return PartitionKey(
            region_code=self.item.region_code,
            category_id=self.item.category_id,
            content_type=self.item.content_type,
        )

    def to_dict(self) -> dict:
        payload = self.item.to_dict()
        payload.update(
            {
                "engagementRate": self.engagement_rate,
                "rank": self.rank,
                "collectedAt": isoformat(self.collected_at),
            }
        )
        return payload
