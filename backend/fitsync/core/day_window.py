"""Day Window — calendar-day boundaries in UTC.

Invariants:
    - All datetimes leaving this module are timezone-aware UTC
    - day_bounds(d) is half-open: start <= t < end

Design Decisions:
    - as_utc() exists because SQLite returns naive datetimes; Postgres returns aware ones
"""

from datetime import date, datetime, time, timedelta, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_bounds(day: date | None = None) -> tuple[datetime, datetime]:
    """[midnight, next midnight) for `day` (today when omitted)."""
    start = start_of_day(day or utcnow().date())
    return start, start + timedelta(days=1)


def parse_day(raw: str) -> date | None:
    """Parse YYYY-MM-DD (or a full ISO timestamp). None when unparseable."""
    try:
        return date.fromisoformat(raw)
    except ValueError:
        pass
    parsed = parse_datetime(raw)
    return parsed.date() if parsed else None


def parse_datetime(raw: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into aware UTC. None when unparseable."""
    try:
        return as_utc(datetime.fromisoformat(raw.replace("Z", "+00:00")))
    except (ValueError, AttributeError):
        return None
