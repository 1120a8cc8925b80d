from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import async_sessionmaker

from trending.application.port.trending_repository_port import TrendingRepositoryPort
from trending.domain.catalog_item import CatalogItem
from trending.domain.content_type import ContentType
from trending.domain.partition_key import PartitionKey
from trending.domain.period import PeriodWindow
from trending.domain.ranked_snapshot_row import RankedSnapshotRow
from trending.infrastructure.orm.models import TrendingVideoORM


def _partition_filters(partition: PartitionKey) -> list:
    # category_id 가 None 이면 '= NULL' 이 아니라 IS NULL 로 비교해야 한다.
    category_clause = (
        TrendingVideoORM.category_id.is_(None)
        if partition.category_id is None
        else TrendingVideoORM.category_id == partition.category_id
    )
    return [
        TrendingVideoORM.region_code == partition.region_code,
        category_clause,
        TrendingVideoORM.video_type == partition.content_type.value,
    ]


def _window_filters(window: PeriodWindow | None) -> list:
    if window is None:
        return []
    filters = [TrendingVideoORM.published_at >= window.start]
    if window.end is not None:
        filters.append(TrendingVideoORM.published_at < window.end)
    return filters


def _to_orm(row: RankedSnapshotRow) -> TrendingVideoORM:
    item = row.item
    return TrendingVideoORM(
        video_id=item.id,
        video_type=item.content_type.value,
        title=item.title,
        description=item.description,
        thumbnail_url=item.thumbnail_url,
        published_at=item.published_at,
        duration=item.duration,
        view_count=item.view_count,
        like_count=item.like_count,
        comment_count=item.comment_count,
        engagement_rate=row.engagement_rate,
        channel_id=item.channel_id,
        channel_title=item.channel_title,
        channel_thumbnail_url=item.channel_thumbnail_url,
        subscriber_count=item.subscriber_count,
        video_count=item.video_count,
        region_code=item.region_code,
        category_id=item.category_id,
        rank=row.rank,
        collected_at=row.collected_at,
    )


def _to_domain(orm: TrendingVideoORM) -> RankedSnapshotRow:
    return RankedSnapshotRow(
        item=CatalogItem(
            id=orm.video_id,
            title=orm.title or "",
            channel_id=orm.channel_id or "",
            content_type=ContentType(orm.video_type),
            region_code=orm.region_code,
            category_id=orm.category_id,
            description=orm.description,
            thumbnail_url=orm.thumbnail_url,
            channel_title=orm.channel_title,
            channel_thumbnail_url=orm.channel_thumbnail_url,
            published_at=orm.published_at,
            duration=orm.duration,
            view_count=orm.view_count or 0,
            like_count=orm.like_count or 0,
            comment_count=orm.comment_count or 0,
            subscriber_count=orm.subscriber_count or 0,
            video_count=orm.video_count or 0,
        ),
        engagement_rate=orm.engagement_rate or 0.0,
        rank=orm.rank,
        collected_at=orm.collected_at,
    )


class TrendingRepositoryImpl(TrendingRepositoryPort):
    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    async def replace_partition(self, partition: PartitionKey, rows: Sequence[RankedSnapshotRow]) -> int:
        async with self.session_factory() as session:
            # 삭제와 삽입을 한 트랜잭션으로 묶어 빈/반쯤 교체된 파티션이 보이지 않게 한다.
            async with session.begin():
                await session.execute(delete(TrendingVideoORM).where(*_partition_filters(partition)))
                if rows:
                    session.add_all([_to_orm(row) for row in rows])
        return len(rows)

    async def find_partition(
        self,
        partition: PartitionKey,
        window: PeriodWindow | None = None,
    ) -> list[RankedSnapshotRow]:
        stmt = (
            select(TrendingVideoORM)
            .where(*_partition_filters(partition), *_window_filters(window))
            .order_by(TrendingVideoORM.rank.asc())
        )
        async with self.session_factory() as session:
            result = await session.scalars(stmt)
            return [_to_domain(orm) for orm in result.all()]

    async def find_rows(
        self,
        region_code: str,
        content_type: ContentType,
        window: PeriodWindow | None = None,
    ) -> list[RankedSnapshotRow]:
        stmt = (
            select(TrendingVideoORM)
            .where(
                TrendingVideoORM.region_code == region_code,
                TrendingVideoORM.video_type == content_type.value,
                *_window_filters(window),
            )
            .order_by(TrendingVideoORM.id.asc())
        )
        async with self.session_factory() as session:
            result = await session.scalars(stmt)
            return [_to_domain(orm) for orm in result.all()]
