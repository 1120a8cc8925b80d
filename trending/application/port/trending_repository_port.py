from abc import ABC, abstractmethod
from typing import Sequence

from trending.domain.content_type import ContentType
from trending.domain.partition_key import PartitionKey
from trending.domain.period import PeriodWindow
from trending.domain.ranked_snapshot_row import RankedSnapshotRow


class TrendingRepositoryPort(ABC):
    @abstractmethod
    async def replace_partition(self, partition: PartitionKey, rows: Sequence[RankedSnapshotRow]) -> int:
        """파티션 기존 행 삭제 후 새 행 삽입을 하나의 트랜잭션으로 수행한다."""
        raise NotImplementedError

    # 조회 전용 메서드들
    @abstractmethod
    async def find_partition(
        self,
        partition: PartitionKey,
        window: PeriodWindow | None = None,
    ) -> list[RankedSnapshotRow]:
        raise NotImplementedError

    @abstractmethod
    async def find_rows(
        self,
        region_code: str,
        content_type: ContentType,
        window: PeriodWindow | None = None,
    ) -> list[RankedSnapshotRow]:
        raise NotImplementedError
