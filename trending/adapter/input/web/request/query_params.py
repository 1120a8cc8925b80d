from datetime import date

from fastapi import HTTPException

from trending.application.exceptions import (
    ChannelNotFoundError,
    InvalidParameterError,
    UpstreamError,
    UpstreamUnavailableError,
)
from trending.domain.content_type import ContentType
from trending.domain.period import PeriodFilter

# 기존 UI 가 쓰던 값(shorts/videos)도 받는다.
_CONTENT_TYPE_ALIASES = {
    "short": ContentType.SHORT,
    "shorts": ContentType.SHORT,
    "long": ContentType.LONG,
    "video": ContentType.LONG,
    "videos": ContentType.LONG,
}


def parse_content_type(value: str | None, default: ContentType = ContentType.SHORT) -> ContentType:
    if not value:
        return default
    try:
        return _CONTENT_TYPE_ALIASES[value.lower()]
    except KeyError:
        raise InvalidParameterError(f"Unsupported content type: {value}") from None


def parse_period(value: str | None) -> PeriodFilter:
    if not value:
        return PeriodFilter.ALL
    try:
        return PeriodFilter(value)
    except ValueError:
        raise InvalidParameterError(f"Unsupported period: {value}") from None


def parse_anchor_date(value: str | None) -> date | None:
    """YYYY-MM-DD 또는 UI 형식 YYYY.MM.DD / YYYY.MM / YYYY."""
    if not value:
        return None
    parts = value.replace("-", ".").split(".")
    try:
        numbers = [int(part) for part in parts]
        year = numbers[0]
        month = numbers[1] if len(numbers) > 1 else 1
        day = numbers[2] if len(numbers) > 2 else 1
        return date(year, month, day)
    except (ValueError, IndexError):
        raise InvalidParameterError(f"Invalid date: {value}") from None


def parse_category(value: str | None) -> str | None:
    if not value or value.lower() == "all":
        return None
    return value


def to_http_exception(exc: Exception) -> HTTPException:
    """도메인 예외를 HTTP 상태 코드로 변환한다."""
    if isinstance(exc, InvalidParameterError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ChannelNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, UpstreamUnavailableError):
        return HTTPException(status_code=500, detail=str(exc))
    if isinstance(exc, UpstreamError):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=500, detail="Internal server error")
