# backend/sacramentdesk/timeutils.py
from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Tuple
from zoneinfo import ZoneInfo


def utcnow() -> datetime:
    """Current UTC time. Wrapped so tests can patch it."""
    return datetime.now(timezone.utc)


def as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def today_local(tz: str) -> date:
    return utcnow().astimezone(ZoneInfo(tz)).date()


def local_day_bounds(start: date, end: date, tz: str) -> Tuple[datetime, datetime]:
    """
    UTC instants covering local calendar days `start`..`end` inclusive.

    Returned as [lower, upper) so callers filter with `>=` and `<`.
    """
    zone = ZoneInfo(tz)
    lower = datetime.combine(start, time(0, 0), zone)
    upper = datetime.combine(end + timedelta(days=1), time(0, 0), zone)
    return lower.astimezone(timezone.utc), upper.astimezone(timezone.utc)
