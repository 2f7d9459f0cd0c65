"""일 단위 날짜 비교를 위한 타임존 헬퍼입니다."""

from datetime import date, datetime, timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo

from trainops.config import settings

DayLike = Union[date, datetime, str]


def engine_zone() -> ZoneInfo:
    return ZoneInfo(settings.BATCH_PHASE_TIMEZONE)


def today_in(tz: Optional[ZoneInfo] = None) -> date:
    """기준 타임존의 오늘 날짜(자정 기준)를 반환한다."""
    zone = tz or engine_zone()
    return datetime.now(timezone.utc).astimezone(zone).date()


def as_day(value: DayLike, tz: Optional[ZoneInfo] = None) -> date:
    """date/datetime/ISO 문자열을 기준 타임존의 달력 일자로 정규화한다.

    naive datetime은 이미 기준 타임존 값으로 간주하고 시각만 버린다.
    aware datetime은 기준 타임존으로 변환한 뒤 날짜를 취한다.
    """
    zone = tz or engine_zone()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("empty date value")
        if "T" in text or " " in text:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
        else:
            value = date.fromisoformat(text)
    # datetime은 date의 하위 클래스이므로 먼저 확인한다.
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(zone)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError(f"unsupported date value: {value!r}")
