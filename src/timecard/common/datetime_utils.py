from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse HH:MM (or HH:MM:SS) into time; empty values give None."""
    if value is not None and not isinstance(value, str):
        raise ValueError(f"Invalid time value: {value!r}")
    if not value or not value.strip():
        return None
    value = value.strip()
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value, fmt).time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now()


def truncate_to_minute(value: datetime) -> datetime:
    return value.replace(second=0, microsecond=0)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (negative when end is earlier)."""
    return int((end - start).total_seconds() // 60)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """[start, end) datetimes covering one local calendar day."""
    start = datetime.combine(day, time.min)
    return start, start + timedelta(days=1)


def month_range(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"
