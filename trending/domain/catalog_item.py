from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from trending.domain.content_type import ContentType


def isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


@dataclass
class CatalogItem:
    # 업스트림 응답을 파싱한 직후의 영상 단위 모델 (채널 통계 포함)
    id: str
    title: str
    channel_id: str
    content_type: ContentType
    region_code: str
    category_id: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    channel_title: Optional[str] = None
    channel_thumbnail_url: Optional[str] = None
    published_at: Optional[datetime] = None
    duration: Optional[str] = None
    view_count: int = 0
    like_count: int = 0
    comment_count: int = 0
    subscriber_count: int = 0
    video_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "thumbnailUrl": self.thumbnail_url,
            "publishedAt": isoformat(self.published_at),
            "duration": self.duration,
            "contentType": self.content_type.value,
            "channelId": self.channel_id,
            "channelTitle": self.channel_title,
            "channelThumbnailUrl": self.channel_thumbnail_url,
            "viewCount": self.view_count,
            "likeCount": self.like_count,
            "commentCount": self.comment_count,
            "subscriberCount": self.subscriber_count,
            "videoCount": self.video_count,
            "regionCode": self.region_code,
            "categoryId": self.category_id,
        }
