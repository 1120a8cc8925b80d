"""
랭킹/분석 지표 계산. 모두 부수효과 없는 순수 함수이며 예외를 던지지 않는다.
분모가 0 이면 나누기 전에 검사해 0 을 돌려준다.
"""
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence, TypeVar

from trending.domain.catalog_item import CatalogItem

DEFAULT_HIDDEN_GEM_THRESHOLD = 2.0

T = TypeVar("T")


def engagement_rate(like_count: int | None, comment_count: int | None, view_count: int | None) -> float:
    """(좋아요 + 댓글) / 조회수 * 100."""
    views = view_count or 0
    if views <= 0:
        return 0.0
    return ((like_count or 0) + (comment_count or 0)) / views * 100


def views_per_subscriber(view_count: int | None, subscriber_count: int | None) -> float:
    subscribers = subscriber_count or 0
    if subscribers <= 0:
        return 0.0
    return (view_count or 0) / subscribers


def avg_views_per_video(view_count: int | None, video_count: int | None) -> float:
    videos = video_count or 0
    if videos <= 0:
        return 0.0
    return (view_count or 0) / videos


def is_hidden_gem(ratio: float, threshold: float = DEFAULT_HIDDEN_GEM_THRESHOLD) -> bool:
    return ratio >= threshold


@dataclass
class HiddenGem:
    item: CatalogItem
    views_to_subscriber_ratio: float

    def to_dict(self) -> dict:
        return {
            "id": self.item.id,
            "title": self.item.title,
            "viewCount": self.item.view_count,
            "viewsToSubscriberRatio": self.views_to_subscriber_ratio,
            "publishedAt": self.item.to_dict()["publishedAt"],
        }


def find_hidden_gems(
    items: Iterable[CatalogItem],
    subscriber_count: int,
    threshold: float = DEFAULT_HIDDEN_GEM_THRESHOLD,
) -> list[HiddenGem]:
    """채널 구독자 수 대비 조회수 비율이 threshold 이상인 영상 (비율 내림차순)."""
    gems = []
    for item in items:
        ratio = views_per_subscriber(item.view_count, subscriber_count)
        if is_hidden_gem(ratio, threshold):
            gems.append(HiddenGem(item=item, views_to_subscriber_ratio=ratio))
    return sorted(gems, key=lambda gem: gem.views_to_subscriber_ratio, reverse=True)


@dataclass
class PerformanceScore:
    score: int = 0
    insights: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"score": self.score, "insights": list(self.insights)}


def _band(value: float, high: float, medium: float, points: tuple[int, int, int], messages: tuple[str, str, str]):
    if value > high:
        return points[0], messages[0]
    if value > medium:
        return points[1], messages[1]
    return points[2], messages[2]


def channel_performance_score(
    avg_views_per_subscriber: float,
    avg_views_per_video: float,
    content_volume: int,
    total_views: int,
) -> PerformanceScore:
    """
    네 가지 신호를 각각 상/중/하 구간으로 나누어 점수를 더한다. 최대 100점.

    - 구독자 대비 조회수: >100 30점, >50 20점, 그 외 10점
    - 영상당 평균 조회수: >10,000 30점, >5,000 20점, 그 외 10점
    - 콘텐츠 수: >100 20점, >50 15점, 그 외 5점
    - 총 조회수: >1,000,000 20점, >100,000 15점, 그 외 5점
    """
    bands = (
        _band(
            avg_views_per_subscriber,
            100,
            50,
            (30, 20, 10),
            (
                "구독자 대비 조회수가 매우 높습니다.",
                "구독자 대비 조회수가 양호합니다.",
                "구독자 대비 조회수를 개선할 여지가 있습니다.",
            ),
        ),
        _band(
            avg_views_per_video,
            10_000,
            5_000,
            (30, 20, 10),
            (
                "비디오당 평균 조회수가 우수합니다.",
                "비디오당 평균 조회수가 양호합니다.",
                "비디오당 평균 조회수를 높일 수 있습니다.",
            ),
        ),
        _band(
            content_volume,
            100,
            50,
            (20, 15, 5),
            (
                "콘텐츠 생산량이 풍부합니다.",
                "적절한 양의 콘텐츠를 보유하고 있습니다.",
                "더 많은 콘텐츠 생산을 고려해보세요.",
            ),
        ),
        _band(
            total_views,
            1_000_000,
            100_000,
            (20, 15, 5),
            (
                "총 조회수가 매우 높습니다.",
                "총 조회수가 양호합니다.",
                "채널 성장을 위한 노력이 필요합니다.",
            ),
        ),
    )
    result = PerformanceScore()
    for points, message in bands:
        result.score += points
        result.insights.append(message)
    return result


SORT_FIELDS: dict[str, Callable[[CatalogItem], float]] = {
    "views": lambda item: item.view_count or 0,
    "likes": lambda item: item.like_count or 0,
    "comments": lambda item: item.comment_count or 0,
    "engagement": lambda item: engagement_rate(item.like_count, item.comment_count, item.view_count),
    "ratio": lambda item: views_per_subscriber(item.view_count, item.subscriber_count),
}


def sort_items(
    items: Sequence[T],
    sort_field: str = "views",
    descending: bool = True,
    item_getter: Callable[[T], CatalogItem] = lambda value: value,
) -> list[T]:
    """
    선택한 수치 필드로 안정 정렬한다. 값이 같으면 입력 순서를 유지한다.
    (sorted 는 reverse=True 에서도 안정 정렬)
    """
    try:
        key_fn = SORT_FIELDS[sort_field]
    except KeyError:
        raise ValueError(f"Unsupported sort field: {sort_field}") from None
    return sorted(items, key=lambda value: key_fn(item_getter(value)), reverse=descending)
