"""Event Enforcement — pure validation of event payloads and registration eligibility.

Invariants:
    - Functions are PURE: the caller passes `now`, nothing reads the clock here
    - An event date must be strictly in the future at creation/update time
    - Registration is refused once the event date has passed
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from fitsync.core.day_window import as_utc, parse_datetime


EVENT_REQUIRED: tuple[str, ...] = (
    "name", "description", "location", "duration", "type", "event_date",
)


def check_event_date(raw: Any, now: datetime) -> tuple[datetime | None, str | None]:
    """Parse and vet an event date. Returns (parsed, None) or (None, message)."""
    parsed = parse_datetime(raw) if isinstance(raw, str) else None
    if parsed is None:
        return None, "Invalid event date format"
    if parsed < now:
        return None, "Event date must be in the future"
    return parsed, None


def validate_event_create(
    data: Mapping[str, Any], now: datetime,
) -> tuple[datetime | None, str | None]:
    """Required fields + date checks for a new event."""
    if any(not data.get(name) for name in EVENT_REQUIRED):
        return None, (
            "All required fields must be provided: "
            "name, description, location, duration, type, eventDate"
        )
    return check_event_date(data["event_date"], now)


def registration_closed(event_date: datetime, now: datetime) -> bool:
    return as_utc(event_date) < now


def paginate(page: int, limit: int, total: int) -> dict:
    """Pagination block for list responses."""
    return {
        "currentPage": page,
        "totalPages": -(-total // limit),
        "totalEvents": total,
        "hasNext": page * limit < total,
        "hasPrev": page > 1,
    }
