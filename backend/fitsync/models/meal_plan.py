"""MealPlan ORM — one day's logged meals with model-estimated nutrition.

Invariants:
    - At most one plan per (user, calendar day); enforced by the meal logging route
    - date is the UTC midnight of the day the plan covers
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Float, DateTime, Text, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from fitsync.db.base import Base


class MealPlan(Base):
    __tablename__ = "meal_plans"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    breakfast: Mapped[str] = mapped_column(Text, nullable=False, default="")
    lunch: Mapped[str] = mapped_column(Text, nullable=False, default="")
    dinner: Mapped[str] = mapped_column(Text, nullable=False, default="")
    snacks: Mapped[str] = mapped_column(Text, nullable=False, default="")
    total_calories: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    protein_grams: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    carbs_grams: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    fats_grams: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    user: Mapped["User"] = relationship("User", back_populates="meal_plans")
