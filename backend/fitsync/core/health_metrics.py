"""Health Metrics — pure arithmetic over body measurements and activities.

Invariants:
    - Every function is PURE: no IO, no clock, no randomness
    - BMI_THRESHOLDS is the single source of truth for category cutoffs
    - ACTIVITY_KCAL_PER_MINUTE keys are lower-case; lookups are case-insensitive
    - estimate_calories returns None (never 0) for unknown activities

Design Decisions:
    - Calorie burn scales linearly with body weight relative to a 70 kg reference
    - Calorie needs use Mifflin-St Jeor BMR times an activity multiplier
"""

from dataclasses import dataclass

from fitsync.core.domain_types import (
    ActivityLevel, BmiCategory, Gender, WeightGoalType,
)


# Upper bounds (exclusive) for each category; anything above is OBESE.
BMI_THRESHOLDS: tuple[tuple[float, BmiCategory], ...] = (
    (18.5, BmiCategory.UNDERWEIGHT),
    (25.0, BmiCategory.NORMAL),
    (30.0, BmiCategory.OVERWEIGHT),
)

REFERENCE_WEIGHT_KG: float = 70.0

ACTIVITY_KCAL_PER_MINUTE: dict[str, int] = {
    "walking": 4,
    "running": 10,
    "swimming": 8,
    "cycling": 7,
    "yoga": 3,
    "skipping": 12,
    "dancing": 6,
    "weightlifting": 6,
}

ACTIVITY_FACTORS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}

# Mifflin-St Jeor sex offsets; OTHER uses their midpoint.
_BMR_OFFSETS: dict[Gender, float] = {
    Gender.MALE: 5.0,
    Gender.FEMALE: -161.0,
    Gender.OTHER: -78.0,
}

MAINTENANCE_TOLERANCE_KG: float = 1.0


@dataclass(frozen=True)
class BmiClassification:
    category: BmiCategory
    good: bool

    def to_dict(self) -> dict:
        return {"category": self.category.value, "good": self.good}


def compute_bmi(weight_kg: float, height_cm: float, digits: int = 2) -> float:
    """Body Mass Index: weight (kg) / height (m)^2, rounded to `digits`."""
    if height_cm <= 0:
        raise ValueError("height_cm must be positive")
    height_m = height_cm / 100
    return round(weight_kg / (height_m * height_m), digits)


def classify_bmi(bmi: float) -> BmiClassification:
    """Map a BMI to its category. Only NORMAL counts as good."""
    for upper, category in BMI_THRESHOLDS:
        if bmi < upper:
            return BmiClassification(category, category == BmiCategory.NORMAL)
    return BmiClassification(BmiCategory.OBESE, False)


def estimate_calories(
    activity: str, minutes: float, weight_kg: float,
) -> int | None:
    """Calories burnt for `minutes` of `activity`, or None if unknown."""
    per_minute = ACTIVITY_KCAL_PER_MINUTE.get(activity.strip().lower())
    if not per_minute:
        return None
    return round(per_minute * minutes * (weight_kg / REFERENCE_WEIGHT_KG))


def estimate_calorie_needs(
    weight_kg: float,
    height_cm: float,
    age: int,
    gender: Gender | str,
    activity_level: ActivityLevel | str,
) -> float:
    """Daily energy expenditure (kcal), rounded to whole calories."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age + _BMR_OFFSETS[Gender(gender)]
    return float(round(bmr * ACTIVITY_FACTORS[ActivityLevel(activity_level)]))


def classify_weight_goal(current_kg: float, target_kg: float) -> WeightGoalType:
    diff = target_kg - current_kg
    if abs(diff) < MAINTENANCE_TOLERANCE_KG:
        return WeightGoalType.MAINTENANCE
    if diff > 0:
        return WeightGoalType.WEIGHT_GAIN
    return WeightGoalType.WEIGHT_LOSS
