"""Profile Enforcement — tests for registration, login, update and target-weight rules.

Tests cover:
    - validate_registration: required fields, email, password, ranges, enums (in that order)
    - validate_login: presence and email shape
    - validate_profile_update: skips absent fields
    - validate_target_weight: type and range
"""

import pytest

from fitsync.core.enforce_profile import (
    ACTIVITY_LEVEL_MESSAGE,
    GENDER_MESSAGE,
    HEALTH_GOAL_MESSAGE,
    is_valid_email,
    validate_login,
    validate_profile_update,
    validate_registration,
    validate_target_weight,
)


def _valid(**overrides) -> dict:
    data = {
        "name": "Alex",
        "email": "alex@example.com",
        "password": "secret1",
        "age": 30,
        "height_cm": 170,
        "current_weight_kg": 65,
        "gender": "FEMALE",
        "health_goal": "MAINTENANCE",
        "activity_level": "ACTIVE",
    }
    data.update(overrides)
    return data


# ─── validate_registration ───────────────────────────────────────

def test_registration_accepts_valid_payload():
    assert validate_registration(_valid()) is None


@pytest.mark.parametrize("missing", [
    "name", "email", "password", "age", "height_cm",
    "current_weight_kg", "gender", "health_goal", "activity_level",
])
def test_registration_requires_every_field(missing):
    data = _valid()
    del data[missing]
    assert validate_registration(data) == "All required fields must be provided"


def test_registration_rejects_bad_email():
    assert validate_registration(_valid(email="alex@")) == "Invalid email format"


def test_registration_rejects_short_password():
    assert validate_registration(_valid(password="12345")) == (
        "Password must be at least 6 characters long"
    )


@pytest.mark.parametrize("field, value, message", [
    ("age", 12, "Age must be between 13 and 120"),
    ("age", 121, "Age must be between 13 and 120"),
    ("height_cm", 49, "Height must be between 50 and 300 cm"),
    ("height_cm", 301, "Height must be between 50 and 300 cm"),
    ("current_weight_kg", 19, "Weight must be between 20 and 500 kg"),
    ("current_weight_kg", 501, "Weight must be between 20 and 500 kg"),
    ("target_weight_kg", 10, "Target weight must be between 20 and 500 kg"),
])
def test_registration_rejects_out_of_range(field, value, message):
    assert validate_registration(_valid(**{field: value})) == message


@pytest.mark.parametrize("field, value", [
    ("age", 13), ("age", 120), ("height_cm", 50), ("height_cm", 300),
    ("current_weight_kg", 20), ("current_weight_kg", 500),
])
def test_registration_range_bounds_are_inclusive(field, value):
    assert validate_registration(_valid(**{field: value})) is None


@pytest.mark.parametrize("field, message", [
    ("gender", GENDER_MESSAGE),
    ("health_goal", HEALTH_GOAL_MESSAGE),
    ("activity_level", ACTIVITY_LEVEL_MESSAGE),
])
def test_registration_rejects_unknown_enum(field, message):
    assert validate_registration(_valid(**{field: "NOPE"})) == message


def test_gender_message_lists_values():
    assert GENDER_MESSAGE == "Invalid gender. Must be MALE, FEMALE, or OTHER"


def test_registration_checks_ranges_before_enums():
    data = _valid(age=5, gender="NOPE")
    assert validate_registration(data) == "Age must be between 13 and 120"


# ─── validate_login ──────────────────────────────────────────────

def test_login_requires_both_fields():
    assert validate_login({"email": "a@b.co"}) == "Email and password are required"


def test_login_rejects_bad_email():
    assert validate_login({"email": "nope", "password": "x"}) == "Invalid email format"


def test_login_accepts_valid():
    assert validate_login({"email": "a@b.co", "password": "x"}) is None


def test_is_valid_email_rejects_non_strings():
    assert is_valid_email(None) is False
    assert is_valid_email(42) is False


# ─── validate_profile_update ─────────────────────────────────────

def test_update_with_no_fields_passes():
    assert validate_profile_update({}) is None


def test_update_checks_only_present_fields():
    assert validate_profile_update({"name": "New"}) is None
    assert validate_profile_update({"height_cm": 20}) == (
        "Height must be between 50 and 300 cm"
    )


def test_update_rejects_unknown_activity_level():
    assert validate_profile_update({"activity_level": "LAZY"}) == (
        ACTIVITY_LEVEL_MESSAGE
    )


# ─── validate_target_weight ──────────────────────────────────────

@pytest.mark.parametrize("value", [None, "70", True, [], 0])
def test_target_weight_must_be_number(value):
    assert validate_target_weight(value) == (
        "Target weight is required and must be a number"
    )


@pytest.mark.parametrize("value", [19.9, 500.1])
def test_target_weight_range(value):
    assert validate_target_weight(value) == (
        "Target weight must be between 20 and 500 kg"
    )


def test_target_weight_accepts_float():
    assert validate_target_weight(72.5) is None


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_target_weight_rejects_non_finite(value):
    assert validate_target_weight(value) == (
        "Target weight is required and must be a number"
    )


def test_update_rejects_nan_measurement():
    assert validate_profile_update({"current_weight_kg": float("nan")}) == (
        "Weight must be between 20 and 500 kg"
    )
