from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from trending.domain.catalog_item import isoformat


@dataclass
class ChannelProfile:
    channel_id: str
    title: str
    description: Optional[str] = None
    custom_url: Optional[str] = None
    published_at: Optional[datetime] = None
    thumbnail_default: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_high: Optional[str] = None
    subscriber_count: int = 0
    view_count: int = 0
    video_count: int = 0

    def to_dict(self) -> dict:
        return {
            "id": self.channel_id,
            "title": self.title,
            "description": self.description,
            "customUrl": self.custom_url,
            "publishedAt": isoformat(self.published_at),
            "thumbnails": {
                "default": self.thumbnail_default,
                "medium": self.thumbnail_medium,
                "high": self.thumbnail_high,
            },
            "statistics": {
                "subscriberCount": self.subscriber_count,
                "viewCount": self.view_count,
                "videoCount": self.video_count,
            },
        }


@dataclass
class ChannelSearchResult:
    channel_id: str
    title: str
    description: Optional[str] = None
    thumbnail_default: Optional[str] = None
    thumbnail_medium: Optional[str] = None
    thumbnail_high: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.channel_id,
            "title": self.title,
            "description": self.description,
            "thumbnails": {
                "default": self.thumbnail_default,
                "medium": self.thumbnail_medium,
                "high": self.thumbnail_high,
            },
        }
