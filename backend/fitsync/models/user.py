"""User ORM — account credentials plus the body profile every feature reads.

Invariants:
    - email is unique
    - password holds a bcrypt hash and never leaves the API (see schemas/user.py)
    - gender / health_goal / activity_level hold core.domain_types enum values
    - Deleting a user deletes every dependent row (ORM cascade + ON DELETE CASCADE)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from fitsync.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """User aggregate root — owns stats, meals, events, chat history."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    profile_image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    age: Mapped[int] = mapped_column(Integer, nullable=False)
    height_cm: Mapped[float] = mapped_column(Float, nullable=False)
    current_weight_kg: Mapped[float] = mapped_column(Float, nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    health_goal: Mapped[str] = mapped_column(String(20), nullable=False)
    target_weight_kg: Mapped[float | None] = mapped_column(Float, nullable=True)
    target_deadline: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    activity_level: Mapped[str] = mapped_column(String(20), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    # Relationships
    health_data: Mapped["HealthData | None"] = relationship(
        "HealthData", back_populates="user", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    meal_plans: Mapped[list["MealPlan"]] = relationship(
        "MealPlan", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    chatbot_interactions: Mapped[list["ChatbotInteraction"]] = relationship(
        "ChatbotInteraction", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    health_records: Mapped[list["HealthRecord"]] = relationship(
        "HealthRecord", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    wearable_data: Mapped[list["WearableData"]] = relationship(
        "WearableData", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    activities: Mapped[list["Activity"]] = relationship(
        "Activity", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    daily_stats: Mapped[list["DailyStat"]] = relationship(
        "DailyStat", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    created_events: Mapped[list["Event"]] = relationship(
        "Event", back_populates="creator",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    registrations: Mapped[list["EventRegistration"]] = relationship(
        "EventRegistration", back_populates="user",
        cascade="all, delete-orphan", passive_deletes=True,
    )
