import math
from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return an aware UTC datetime; naive values are taken to already be UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def calculate_duration(start_time: datetime, end_time: datetime) -> int:
    """Whole seconds between two instants, never negative"""
    seconds = (as_utc(end_time) - as_utc(start_time)).total_seconds()
    return max(0, math.floor(seconds))


def elapsed_since(start_time: datetime, now: Optional[datetime] = None) -> int:
    return calculate_duration(start_time, now or utcnow())


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def to_exclusive_date(day: date) -> Optional[date]:
    """Turn an inclusive end date into the exclusive bound used by range queries.

    The last representable day has no successor; None leaves the range open.
    """
    if day == date.max:
        return None
    return day + timedelta(days=1)


def day_range(date_from: date, date_to: date) -> Tuple[datetime, Optional[datetime]]:
    """Half-open UTC range [date_from, date_to + 1 day) for an inclusive pair of dates"""
    end = to_exclusive_date(date_to)
    return start_of_day(date_from), (start_of_day(end) if end else None)
