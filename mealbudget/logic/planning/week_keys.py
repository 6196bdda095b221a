"""Monday-start week keys and date ranges.

Everything here works on calendar dates. Aware datetimes are first moved into
the reference timezone and reduced to their local date, so two instants on the
same local day always share a key, DST transitions included.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple, Union
from zoneinfo import ZoneInfo

from mealbudget.domain.errors import ValidationError
from mealbudget.utilities.config import REFERENCE_TIMEZONE

DateLike = Union[date, datetime]

MONTH_ABBREV = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def calendar_day(value: DateLike, tz: Optional[str] = None) -> date:
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz or REFERENCE_TIMEZONE))
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected date or datetime, got {type(value).__name__}")


def today(now: Optional[datetime] = None, tz: Optional[str] = None) -> date:
    """Current calendar day in the reference timezone, whatever the host clock zone is."""
    return calendar_day(now or datetime.now(timezone.utc), tz)


def week_start(value: DateLike, tz: Optional[str] = None) -> date:
    day = calendar_day(value, tz)
    return day - timedelta(days=day.weekday())


def week_key(value: DateLike, tz: Optional[str] = None) -> str:
    """ISO date of the Monday on or before the given day."""
    return week_start(value, tz).isoformat()


def week_range(value: DateLike, tz: Optional[str] = None) -> Tuple[date, date]:
    """(Monday, Sunday) of the week, both inclusive."""
    monday = week_start(value, tz)
    return monday, monday + timedelta(days=6)


def week_days(value: DateLike, tz: Optional[str] = None) -> List[date]:
    monday = week_start(value, tz)
    return [monday + timedelta(days=i) for i in range(7)]


def parse_week_key(key: str) -> date:
    try:
        monday = date.fromisoformat(str(key).strip())
    except ValueError:
        raise ValidationError(f"Invalid week key: {key!r}", field="week_key") from None
    if monday.weekday() != 0:
        raise ValidationError(f"Week key must be a Monday: {key!r}", field="week_key")
    return monday


def shift_week(value: DateLike, weeks: int, tz: Optional[str] = None) -> date:
    return week_start(value, tz) + timedelta(weeks=weeks)


def _short(day: date) -> str:
    return f"{day.day} {MONTH_ABBREV[day.month - 1]}"


def week_label(value: DateLike, tz: Optional[str] = None) -> str:
    """Header text such as '11 Mar – 17 Mar 2024'."""
    start, end = week_range(value, tz)
    return f"{_short(start)} – {_short(end)} {end.year}"


def iter_weeks(first_monday: date, count: int = 12, today: Optional[date] = None) -> List[Dict]:
    """Week selector entries (start/end/key/label/is_current)."""
    current = today if today is not None else calendar_day(datetime.now(timezone.utc))
    first = week_start(first_monday)
    weeks = []
    for i in range(count):
        start = first + timedelta(weeks=i)
        end = start + timedelta(days=6)
        weeks.append({
            "start": start,
            "end": end,
            "key": start.isoformat(),
            "label": week_label(start),
            "is_current": start <= current <= end,
        })
    return weeks


__all__ = [
    'calendar_day', 'week_start', 'week_key', 'week_range', 'week_days',
    'parse_week_key', 'shift_week', 'today', 'week_label', 'iter_weeks',
]
