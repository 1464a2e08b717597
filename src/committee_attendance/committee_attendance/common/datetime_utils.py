from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def date_part(value: str) -> date:
    """Civil date of an ISO date or date-time string ("2025-03-01T08:00:00" -> 2025-03-01)."""
    return parse_iso_date(value[:10])


def today_utc() -> date:
    """Server civil date.

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).date()


def now_ms() -> int:
    return int(time.time() * 1000)


def dates_in_range(date_from: date, date_to: date) -> list[date]:
    """All dates in [date_from, date_to] inclusive."""
    out: list[date] = []
    d = date_from
    while d <= date_to:
        out.append(d)
        d += timedelta(days=1)
    return out


def weekdays_in_range(date_from: date, date_to: date) -> list[int]:
    """Weekdays (0=Sunday .. 6=Saturday) that occur in the range."""
    days = {(d.weekday() + 1) % 7 for d in dates_in_range(date_from, date_to)}
    return sorted(days)
