"""Event Routes — create, browse, update and delete fitness events; register and unregister.

Invariants:
    - Only the creator may update or delete an event (403 otherwise)
    - New and updated event dates must parse and lie in the future
    - A user holds at most one registration per event (409 on repeat, backed by a unique constraint)
    - Registration closes once the event date has passed
    - Every serialized event carries creator, registrations (with users) and participantCount

Design Decisions:
    - Relationships are eager-loaded with selectinload (async sessions cannot lazy-load)
    - Reloads after a write use populate_existing so the identity map does not serve stale collections
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from pydantic.alias_generators import to_camel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fitsync.api.deps import get_current_user
from fitsync.core.day_window import utcnow
from fitsync.core.enforce_event import (
    check_event_date, paginate, registration_closed, validate_event_create,
)
from fitsync.core.errors import (
    ConflictError, ForbiddenError, ResourceNotFoundError, ValidationError,
)
from fitsync.infrastructure.database import get_db
from fitsync.models.event import Event
from fitsync.models.event_registration import EventRegistration
from fitsync.models.user import User
from fitsync.schemas.base import to_wire
from fitsync.schemas.event import (
    EventCreateRequest, EventOut, EventUpdateRequest, RegistrationCreatedOut,
    RegistrationWithEventOut,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/events", tags=["events"])

_EVENT_NOT_FOUND = "Event not found"
_ALREADY_REGISTERED = "You are already registered for this event"

_FULL_EVENT = (
    selectinload(Event.creator),
    selectinload(Event.registrations).selectinload(EventRegistration.user),
)


def _event_payload(event: Event) -> dict:
    return to_wire(EventOut.model_validate(event))


async def _load_event(event_id: UUID, db: AsyncSession) -> Event | None:
    result = await db.execute(
        select(Event)
        .where(Event.id == event_id)
        .options(*_FULL_EVENT)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _owned_event(
    event_id: UUID, user: User, db: AsyncSession, action: str,
) -> Event:
    event = await db.get(Event, event_id)
    if event is None:
        raise ResourceNotFoundError(_EVENT_NOT_FOUND)
    if event.creator_id != user.id:
        raise ForbiddenError(f"Only the event creator can {action} this event")
    return event


async def _find_registration(
    user_id: UUID, event_id: UUID, db: AsyncSession,
) -> EventRegistration | None:
    result = await db.execute(
        select(EventRegistration).where(
            EventRegistration.user_id == user_id,
            EventRegistration.event_id == event_id,
        )
    )
    return result.scalar_one_or_none()


@router.post("/create", status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event_date, error = validate_event_create(body.model_dump(), utcnow())
    if error:
        raise ValidationError(error)

    event = Event(
        name=body.name,
        description=body.description,
        location=body.location,
        duration=body.duration,
        type=body.type,
        trainer=body.trainer or None,
        event_date=event_date,
        creator_id=user.id,
    )
    db.add(event)
    await db.commit()

    event = await _load_event(event.id, db)
    logger.info("Event created", extra={"user_id": str(user.id)})
    return {
        "success": True,
        "message": "Event created successfully",
        "data": {"event": _event_payload(event)},
    }


@router.get("")
@router.get("/")
async def list_events(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    type: str | None = None,
    upcoming: bool = False,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Events ordered by date with pagination; `type` is a case-insensitive substring."""
    conditions = []
    if type:
        conditions.append(Event.type.ilike(f"%{type}%"))
    if upcoming:
        conditions.append(Event.event_date >= utcnow())

    result = await db.execute(
        select(Event)
        .where(*conditions)
        .options(*_FULL_EVENT)
        .order_by(Event.event_date.asc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    events = result.scalars().all()
    total = await db.scalar(
        select(func.count()).select_from(Event).where(*conditions)
    )

    return {
        "success": True,
        "message": "Events retrieved successfully",
        "data": {
            "events": [_event_payload(e) for e in events],
            "pagination": paginate(page, limit, total or 0),
        },
    }


@router.get("/my/created")
async def my_created_events(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(Event)
        .where(Event.creator_id == user.id)
        .options(*_FULL_EVENT)
        .order_by(Event.event_date.asc())
    )
    events = result.scalars().all()
    return {
        "success": True,
        "message": "Your created events retrieved successfully",
        "data": {
            "events": [_event_payload(e) for e in events],
            "total": len(events),
        },
    }


@router.get("/my/registered")
async def my_registered_events(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    result = await db.execute(
        select(EventRegistration)
        .join(EventRegistration.event)
        .where(EventRegistration.user_id == user.id)
        .options(
            selectinload(EventRegistration.event).selectinload(Event.creator),
            selectinload(EventRegistration.event)
            .selectinload(Event.registrations)
            .selectinload(EventRegistration.user),
        )
        .order_by(Event.event_date.asc())
    )
    registrations = result.scalars().all()
    return {
        "success": True,
        "message": "Your registered events retrieved successfully",
        "data": {
            "registrations": [
                to_wire(RegistrationWithEventOut.model_validate(r))
                for r in registrations
            ],
            "total": len(registrations),
        },
    }


@router.get("/{event_id}")
async def get_event(
    event_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event = await _load_event(event_id, db)
    if event is None:
        raise ResourceNotFoundError(_EVENT_NOT_FOUND)
    return {
        "success": True,
        "message": "Event retrieved successfully",
        "data": {"event": _event_payload(event)},
    }


@router.put("/{event_id}")
async def update_event(
    event_id: UUID,
    body: EventUpdateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Apply only the fields present in the body."""
    event = await _owned_event(event_id, user, db, "update")

    changes = {name: getattr(body, name) for name in body.model_fields_set}
    for name, value in changes.items():
        if value is None and name != "trainer":
            raise ValidationError(f"{to_camel(name)} cannot be empty", field=name)
    if "event_date" in changes:
        event_date, error = check_event_date(changes["event_date"], utcnow())
        if error:
            raise ValidationError(error, field="eventDate")
        changes["event_date"] = event_date

    for name, value in changes.items():
        setattr(event, name, value)
    await db.commit()

    event = await _load_event(event_id, db)
    return {
        "success": True,
        "message": "Event updated successfully",
        "data": {"event": _event_payload(event)},
    }


@router.post("/{event_id}/register", status_code=status.HTTP_201_CREATED)
async def register_for_event(
    event_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event = await db.get(Event, event_id)
    if event is None:
        raise ResourceNotFoundError(_EVENT_NOT_FOUND)
    if registration_closed(event.event_date, utcnow()):
        raise ValidationError("Cannot register for past events")
    if await _find_registration(user.id, event_id, db):
        raise ConflictError(_ALREADY_REGISTERED)

    registration = EventRegistration(user_id=user.id, event_id=event_id)
    db.add(registration)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(_ALREADY_REGISTERED)

    result = await db.execute(
        select(EventRegistration)
        .where(EventRegistration.id == registration.id)
        .options(
            selectinload(EventRegistration.event).selectinload(Event.creator),
        )
        .execution_options(populate_existing=True)
    )
    registration = result.scalar_one()
    return {
        "success": True,
        "message": "Successfully registered for the event",
        "data": {
            "registration": to_wire(
                RegistrationCreatedOut.model_validate(registration),
            ),
        },
    }


@router.delete("/{event_id}/unregister")
async def unregister_from_event(
    event_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    registration = await _find_registration(user.id, event_id, db)
    if registration is None:
        raise ResourceNotFoundError("You are not registered for this event")

    await db.delete(registration)
    await db.commit()
    return {"success": True, "message": "Successfully unregistered from the event"}


@router.delete("/{event_id}")
async def delete_event(
    event_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    event = await _owned_event(event_id, user, db, "delete")
    await db.delete(event)
    await db.commit()
    logger.info("Event deleted", extra={"user_id": str(user.id)})
    return {"success": True, "message": "Event deleted successfully"}
