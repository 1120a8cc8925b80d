from sqlalchemy import BigInteger, Column, DateTime, Float, Index, Integer, String, Text

from config.database.session import Base


class TrendingVideoORM(Base):
    __tablename__ = "trending_video"
    __table_args__ = (
        Index("ix_trending_video_partition", "region_code", "category_id", "video_type", "rank"),
        Index("ix_trending_video_published_at", "published_at"),
    )

    # 같은 영상이 여러 파티션(지역/카테고리)에 동시에 들어갈 수 있어 대리키를 쓴다.
    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    video_id = Column(String(100), nullable=False)
    video_type = Column(String(20), nullable=False)
    title = Column(String(500))
    description = Column(Text)
    thumbnail_url = Column(String(500))
    published_at = Column(DateTime)
    duration = Column(String(20))
    view_count = Column(BigInteger, default=0)
    like_count = Column(BigInteger, default=0)
    comment_count = Column(BigInteger, default=0)
    engagement_rate = Column(Float, default=0)
    channel_id = Column(String(100))
    channel_title = Column(String(255))
    channel_thumbnail_url = Column(String(500))
    subscriber_count = Column(BigInteger, default=0)
    video_count = Column(Integer, default=0)
    region_code = Column(String(20), nullable=False)
    category_id = Column(String(20), nullable=True)
    rank = Column(Integer, nullable=False)
    collected_at = Column(DateTime, nullable=False)
