"""Event Schemas — event payloads with creator, registrations and participant count.

Invariants:
    - EventOut.participant_count always equals len(registrations)
    - eventDate arrives as a string and is parsed in core/enforce_event.py
"""

from datetime import datetime
from uuid import UUID

from pydantic import Field, model_validator

from fitsync.schemas.base import CamelModel
from fitsync.schemas.user import UserSummary


class EventCreateRequest(CamelModel):
    name: str | None = None
    description: str | None = None
    location: str | None = None
    duration: int | None = Field(None, ge=0)
    type: str | None = None
    trainer: str | None = None
    event_date: str | None = None


class EventUpdateRequest(EventCreateRequest):
    """Same fields as creation; all optional, only provided ones applied."""


class RegistrationOut(CamelModel):
    id: UUID
    user_id: UUID
    event_id: UUID
    registered_at: datetime
    user: UserSummary


class EventOut(CamelModel):
    id: UUID
    name: str
    description: str
    location: str
    duration: int
    type: str
    trainer: str | None = None
    event_date: datetime
    creator_id: UUID
    created_at: datetime
    updated_at: datetime
    creator: UserSummary
    registrations: list[RegistrationOut] = []
    participant_count: int = 0

    @model_validator(mode="after")
    def count_participants(self) -> "EventOut":
        self.participant_count = len(self.registrations)
        return self


class EventBrief(CamelModel):
    """Event embedded in a fresh registration (creator only)."""
    id: UUID
    name: str
    description: str
    location: str
    duration: int
    type: str
    trainer: str | None = None
    event_date: datetime
    creator_id: UUID
    creator: UserSummary


class RegistrationCreatedOut(CamelModel):
    id: UUID
    user_id: UUID
    event_id: UUID
    registered_at: datetime
    event: EventBrief


class RegistrationWithEventOut(CamelModel):
    id: UUID
    user_id: UUID
    event_id: UUID
    registered_at: datetime
    event: EventOut
