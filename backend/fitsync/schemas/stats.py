"""Stats Schemas — bodies for suggestion endpoints and records logged under /api/stats.

Invariants:
    - targetWeight and chat message are validated in the route (type + range), so typed Any here
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from fitsync.schemas.base import CamelModel


class ActivityRequest(CamelModel):
    activity: str | None = None
    minutes: float = Field(30, gt=0, le=1440)


class MealLogRequest(CamelModel):
    breakfast: str | None = None
    lunch: str | None = None
    dinner: str | None = None
    snacks: str | None = None


class WeightGoalRequest(CamelModel):
    target_weight: Any = None


class ChatRequest(CamelModel):
    message: Any = None


class ActivityLogRequest(CamelModel):
    name: str | None = None
    duration: int | None = Field(None, gt=0, le=1440)
    calories_burnt: int | None = Field(None, ge=0)
    date: datetime | None = None


class HealthRecordRequest(CamelModel):
    weight: float | None = Field(None, ge=20, le=500)
    diagnosis: str | None = None
    medications: str | None = None
    allergies: str | None = None
    procedures: str | None = None
    notes: str | None = None
    visit_date: datetime | None = None


class WearableDataRequest(CamelModel):
    steps: int | None = Field(None, ge=0)
    heart_rate: int | None = Field(None, ge=20, le=250)
    sleep_hours: float | None = Field(None, ge=0, le=24)
    calories_burned: int | None = Field(None, ge=0)


class MealPlanOut(CamelModel):
    id: UUID
    user_id: UUID
    date: datetime
    breakfast: str
    lunch: str
    dinner: str
    snacks: str
    total_calories: float
    protein_grams: float
    carbs_grams: float
    fats_grams: float


class ActivityOut(CamelModel):
    id: UUID
    user_id: UUID
    name: str
    duration: int
    calories_burnt: int
    date: datetime


class DailyStatOut(CamelModel):
    id: UUID
    user_id: UUID
    date: datetime
    steps: int
    active_calories: int
    heart_rate_avg: float | None = None
    sleep_hours: float | None = None
    weight_kg: float | None = None


class ChatInteractionOut(CamelModel):
    id: UUID
    question: str
    answer: str
    is_relevant: bool
    created_at: datetime


class HealthRecordOut(CamelModel):
    id: UUID
    user_id: UUID
    weight: float | None = None
    diagnosis: str | None = None
    medications: str | None = None
    allergies: str | None = None
    procedures: str | None = None
    notes: str | None = None
    visit_date: datetime
    created_at: datetime


class WearableDataOut(CamelModel):
    id: UUID
    user_id: UUID
    steps: int | None = None
    heart_rate: int | None = None
    sleep_hours: float | None = None
    calories_burned: int | None = None
    created_at: datetime
