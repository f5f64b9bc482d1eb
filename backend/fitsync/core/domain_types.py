"""Domain Types — enums for every constrained profile value.

Invariants:
    - All valid states encoded as Enums — no raw string matching in routes
    - Values are the upper-case wire strings clients send and receive

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Stored as plain strings in the database (see models/user.py)
"""

from enum import Enum


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class HealthGoal(str, Enum):
    WEIGHT_LOSS = "WEIGHT_LOSS"
    WEIGHT_GAIN = "WEIGHT_GAIN"
    MAINTENANCE = "MAINTENANCE"


class ActivityLevel(str, Enum):
    """Self-reported activity level — drives the calorie-needs multiplier."""
    SEDENTARY = "SEDENTARY"
    LIGHT = "LIGHT"
    MODERATE = "MODERATE"
    ACTIVE = "ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"


class BmiCategory(str, Enum):
    UNDERWEIGHT = "Underweight"
    NORMAL = "Normal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


class WeightGoalType(str, Enum):
    """Direction of a requested weight change."""
    MAINTENANCE = "maintenance"
    WEIGHT_GAIN = "weight gain"
    WEIGHT_LOSS = "weight loss"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """Wire values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
