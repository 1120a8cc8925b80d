import re

from trending.domain.content_type import ContentType

SHORT_MAX_SECONDS = 60

_HOURS = re.compile(r"(\d+)H")
_MINUTES = re.compile(r"(\d+)M")
_SECONDS = re.compile(r"(\d+)S")


def parse_duration(duration: str | None) -> int:
    """
    ISO 8601 길이 문자열을 초로 바꾼다.
    "PT59S" -> 59, "PT1M2S" -> 62, "PT1H30M" -> 5400. 형식이 아니면 0.
    """
    if not duration or not duration.startswith("PT"):
        return 0

    time_part = duration[2:]
    hours = _HOURS.search(time_part)
    minutes = _MINUTES.search(time_part)
    seconds = _SECONDS.search(time_part)
    return (
        (int(hours.group(1)) if hours else 0) * 3600
        + (int(minutes.group(1)) if minutes else 0) * 60
        + (int(seconds.group(1)) if seconds else 0)
    )


def is_short_duration(duration: str | None) -> bool:
    total = parse_duration(duration)
    return 0 < total <= SHORT_MAX_SECONDS


def classify_content_type(duration: str | None) -> ContentType:
    return ContentType.SHORT if is_short_duration(duration) else ContentType.LONG


def format_duration(seconds: int) -> str:
    """59 -> "0:59", 125 -> "2:05", 3661 -> "1:01:01"."""
    if seconds < 0:
        return "0:00"
    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
