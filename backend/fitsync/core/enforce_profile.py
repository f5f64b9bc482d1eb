"""Profile Enforcement — pure validation of registration, login and profile updates.

Invariants:
    - Every validator is PURE: takes a snake_case mapping, returns the first error message or None
    - Range limits (AGE_RANGE, HEIGHT_RANGE_CM, WEIGHT_RANGE_KG) are the single source of truth
    - NaN and infinity are never in range
    - Update validation only checks fields that are present (not None)

Design Decisions:
    - Returns messages instead of raising: the route decides the HTTP shape
    - First failure wins; clients fix one field at a time
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from fitsync.core.domain_types import (
    ActivityLevel, Gender, HealthGoal, enum_values,
)


EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH: int = 6

AGE_RANGE: tuple[int, int] = (13, 120)
HEIGHT_RANGE_CM: tuple[float, float] = (50, 300)
WEIGHT_RANGE_KG: tuple[float, float] = (20, 500)

REGISTRATION_REQUIRED: tuple[str, ...] = (
    "name", "email", "password", "age", "height_cm",
    "current_weight_kg", "gender", "health_goal", "activity_level",
)


def _one_of(values: list[str]) -> str:
    return ", ".join(values[:-1]) + f", or {values[-1]}"


GENDER_MESSAGE = f"Invalid gender. Must be {_one_of(enum_values(Gender))}"
HEALTH_GOAL_MESSAGE = (
    f"Invalid health goal. Must be {_one_of(enum_values(HealthGoal))}"
)
ACTIVITY_LEVEL_MESSAGE = (
    f"Invalid activity level. Must be {_one_of(enum_values(ActivityLevel))}"
)


def _out_of_range(value: float, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return not math.isfinite(value) or value < low or value > high


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and bool(EMAIL_PATTERN.match(email))


def _check_measurements(data: Mapping[str, Any]) -> str | None:
    """Range checks shared by registration and update. Skips absent fields."""
    age = data.get("age")
    if age is not None and _out_of_range(age, AGE_RANGE):
        return "Age must be between 13 and 120"

    height = data.get("height_cm")
    if height is not None and _out_of_range(height, HEIGHT_RANGE_CM):
        return "Height must be between 50 and 300 cm"

    weight = data.get("current_weight_kg")
    if weight is not None and _out_of_range(weight, WEIGHT_RANGE_KG):
        return "Weight must be between 20 and 500 kg"

    target = data.get("target_weight_kg")
    if target is not None and _out_of_range(target, WEIGHT_RANGE_KG):
        return "Target weight must be between 20 and 500 kg"
    return None


def _check_enums(data: Mapping[str, Any]) -> str | None:
    """Enum membership checks. Skips absent fields."""
    gender = data.get("gender")
    if gender is not None and gender not in enum_values(Gender):
        return GENDER_MESSAGE

    goal = data.get("health_goal")
    if goal is not None and goal not in enum_values(HealthGoal):
        return HEALTH_GOAL_MESSAGE

    level = data.get("activity_level")
    if level is not None and level not in enum_values(ActivityLevel):
        return ACTIVITY_LEVEL_MESSAGE
    return None


def validate_registration(data: Mapping[str, Any]) -> str | None:
    """Registration: required fields, email, password, ranges, enums."""
    if any(not data.get(name) for name in REGISTRATION_REQUIRED):
        return "All required fields must be provided"

    if not is_valid_email(data["email"]):
        return "Invalid email format"

    if len(data["password"]) < MIN_PASSWORD_LENGTH:
        return "Password must be at least 6 characters long"

    return _check_measurements(data) or _check_enums(data)


def validate_login(data: Mapping[str, Any]) -> str | None:
    if not data.get("email") or not data.get("password"):
        return "Email and password are required"
    if not is_valid_email(data["email"]):
        return "Invalid email format"
    return None


def validate_profile_update(data: Mapping[str, Any]) -> str | None:
    """Partial update: only provided fields are checked."""
    return _check_measurements(data) or _check_enums(data)


def validate_target_weight(value: Any) -> str | None:
    """Weight-goal body: numeric (not bool) and within WEIGHT_RANGE_KG."""
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not value
        or not math.isfinite(value)
    ):
        return "Target weight is required and must be a number"
    if _out_of_range(value, WEIGHT_RANGE_KG):
        return "Target weight must be between 20 and 500 kg"
    return None
