from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class PeriodFilter(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    YEAR_END = "yearEnd"
    ALL = "all"


@dataclass(frozen=True)
class PeriodWindow:
    # [start, end) 구간. end 가 None 이면 상한 없음.
    start: datetime
    end: Optional[datetime] = None


def utc_now() -> datetime:
    # DB 와 같은 naive UTC 기준
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _midnight(day: date) -> datetime:
    return datetime(day.year, day.month, day.day)


def _next_month(day: date) -> datetime:
    if day.month == 12:
        return datetime(day.year + 1, 1, 1)
    return datetime(day.year, day.month + 1, 1)


def resolve_period_window(
    period: PeriodFilter | str,
    anchor: date | None = None,
    now: datetime | None = None,
) -> PeriodWindow | None:
    """
    게시일 필터 구간을 계산한다. all 이면 None.

    - anchor 가 있으면 해당 일/주/월/년(yearEnd 는 그 해 12월) 달력 구간
    - 없으면 daily 는 오늘 0시부터, weekly/monthly/yearly 는 최근 7/30/365일,
      yearEnd 는 올해 12월
    시각은 모두 naive UTC 로 다룬다.
    """
    period = PeriodFilter(period)
    now = now or utc_now()

    if period is PeriodFilter.ALL:
        return None

    if period is PeriodFilter.YEAR_END:
        year = anchor.year if anchor else now.year
        return PeriodWindow(start=datetime(year, 12, 1), end=datetime(year + 1, 1, 1))

    if anchor is not None:
        if period is PeriodFilter.DAILY:
            start = _midnight(anchor)
            return PeriodWindow(start=start, end=start + timedelta(days=1))
        if period is PeriodFilter.WEEKLY:
            start = _midnight(anchor)
            return PeriodWindow(start=start, end=start + timedelta(days=7))
        if period is PeriodFilter.MONTHLY:
            return PeriodWindow(start=datetime(anchor.year, anchor.month, 1), end=_next_month(anchor))
        return PeriodWindow(start=datetime(anchor.year, 1, 1), end=datetime(anchor.year + 1, 1, 1))

    if period is PeriodFilter.DAILY:
        return PeriodWindow(start=_midnight(now.date()))
    rolling_days = {PeriodFilter.WEEKLY: 7, PeriodFilter.MONTHLY: 30, PeriodFilter.YEARLY: 365}[period]
    return PeriodWindow(start=now - timedelta(days=rolling_days))
