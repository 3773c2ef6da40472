from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def today_in(tz: ZoneInfo) -> date:
    return datetime.now(tz).date()


def first_of_month(day: date) -> date:
    return day.replace(day=1)


def last_of_month(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(month: date, delta: int) -> date:
    """Shift a month anchor by delta months, always landing on the 1st."""
    index = month.year * 12 + (month.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def month_days(month: date) -> list[date]:
    start = first_of_month(month)
    return [start + timedelta(days=offset) for offset in range(last_of_month(month).day)]


def month_window(month: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Inclusive [start, end] instants of a calendar month in tz."""
    start = datetime.combine(first_of_month(month), time.min, tzinfo=tz)
    end = datetime.combine(last_of_month(month), time.max, tzinfo=tz)
    return start, end


def day_window(day: date, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """Half-open [start, end) instants of a calendar day in tz."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    return start, start + timedelta(days=1)


def sunday_based_weekday(day: date) -> int:
    """Weekday numbering used by the availability tables: 0 = Sunday ... 6 = Saturday."""
    return (day.weekday() + 1) % 7


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def parse_timestamp(value, tz: ZoneInfo) -> datetime | None:
    """Parse an ISO timestamp; naive values are read in tz."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed


def parse_hour(value) -> int | None:
    """Hour-of-day of an "HH:MM[:SS]" string, or None when unparseable."""
    if not isinstance(value, str):
        return None
    try:
        parsed = time.fromisoformat(value.strip())
    except ValueError:
        return None
    return parsed.hour


def format_hour_label(moment: datetime) -> str:
    return moment.strftime("%I:%M %p").lstrip("0")
