"""User Schemas — registration, login, profile update and the public user shape.

Invariants:
    - Request fields are loosely typed (Optional); business rules live in core/enforce_profile.py
    - UserOut never carries the password hash
"""

from datetime import datetime
from uuid import UUID

from fitsync.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None
    profile_image: str | None = None
    age: int | None = None
    height_cm: float | None = None
    current_weight_kg: float | None = None
    gender: str | None = None
    health_goal: str | None = None
    target_weight_kg: float | None = None
    target_deadline: datetime | None = None
    activity_level: str | None = None


class LoginRequest(CamelModel):
    email: str | None = None
    password: str | None = None


class UpdateUserRequest(CamelModel):
    """Partial update — only fields present in the body are applied."""
    name: str | None = None
    profile_image: str | None = None
    age: int | None = None
    height_cm: float | None = None
    current_weight_kg: float | None = None
    gender: str | None = None
    health_goal: str | None = None
    target_weight_kg: float | None = None
    target_deadline: datetime | None = None
    activity_level: str | None = None


class UserOut(CamelModel):
    id: UUID
    name: str
    email: str
    profile_image: str | None = None
    age: int
    height_cm: float
    current_weight_kg: float
    gender: str
    health_goal: str
    target_weight_kg: float | None = None
    target_deadline: datetime | None = None
    activity_level: str
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    """Minimal user embedded in event payloads."""
    id: UUID
    name: str
    email: str
