"""User Accounts — registration, login, profile read/update and account deletion.

Invariants:
    - Email uniqueness checked before insert; a concurrent duplicate still maps to 409
    - Passwords hashed off the event loop (bcrypt is CPU-bound)
    - Responses never include the password hash (UserOut)
    - Deleting an account removes every dependent row via ON DELETE CASCADE
"""

import logging

from fastapi import APIRouter, Depends, status
from pydantic.alias_generators import to_camel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from fitsync.api.deps import get_current_user
from fitsync.core.enforce_profile import (
    validate_login, validate_profile_update, validate_registration,
)
from fitsync.core.errors import AuthenticationError, ConflictError, ValidationError
from fitsync.infrastructure.database import get_db
from fitsync.infrastructure.security import (
    create_access_token, hash_password, verify_password,
)
from fitsync.models.user import User
from fitsync.schemas.base import to_wire
from fitsync.schemas.user import (
    LoginRequest, RegisterRequest, UpdateUserRequest, UserOut,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])

_DUPLICATE_EMAIL = "User with this email already exists"
_BAD_CREDENTIALS = "Invalid email or password"
_NULLABLE_PROFILE_FIELDS = {"profile_image", "target_weight_kg", "target_deadline"}


def _user_payload(user: User) -> dict:
    return to_wire(UserOut.model_validate(user))


async def _find_by_email(email: str, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(body: RegisterRequest, db: AsyncSession = Depends(get_db)):
    error = validate_registration(body.model_dump())
    if error:
        raise ValidationError(error)

    if await _find_by_email(body.email, db):
        raise ConflictError(_DUPLICATE_EMAIL)

    user = User(
        name=body.name,
        email=body.email,
        password=await run_in_threadpool(hash_password, body.password),
        profile_image=body.profile_image,
        age=body.age,
        height_cm=body.height_cm,
        current_weight_kg=body.current_weight_kg,
        gender=body.gender,
        health_goal=body.health_goal,
        target_weight_kg=body.target_weight_kg,
        target_deadline=body.target_deadline,
        activity_level=body.activity_level,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError(_DUPLICATE_EMAIL)
    await db.refresh(user)

    logger.info("User registered", extra={"user_id": str(user.id)})
    return {
        "success": True,
        "message": "User registered successfully",
        "data": {
            "user": _user_payload(user),
            "token": create_access_token(user.id),
        },
    }


@router.post("/login")
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    error = validate_login(body.model_dump())
    if error:
        raise ValidationError(error)

    user = await _find_by_email(body.email, db)
    if not user or not await run_in_threadpool(
        verify_password, body.password, user.password,
    ):
        raise AuthenticationError(_BAD_CREDENTIALS)

    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "user": _user_payload(user),
            "token": create_access_token(user.id),
        },
    }


@router.get("/profile")
async def get_profile(user: User = Depends(get_current_user)):
    return {
        "success": True,
        "message": "User profile retrieved successfully",
        "data": {"user": _user_payload(user)},
    }


@router.put("/update")
async def update_profile(
    body: UpdateUserRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Apply only the fields present in the body."""
    changes = {name: getattr(body, name) for name in body.model_fields_set}
    for name, value in changes.items():
        if value is None and name not in _NULLABLE_PROFILE_FIELDS:
            raise ValidationError(f"{to_camel(name)} cannot be empty", field=name)
    error = validate_profile_update(changes)
    if error:
        raise ValidationError(error)

    for name, value in changes.items():
        setattr(user, name, value)
    await db.commit()
    await db.refresh(user)

    return {
        "success": True,
        "message": "User information updated successfully",
        "data": {"user": _user_payload(user)},
    }


@router.delete("/delete")
async def delete_account(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    user_id = str(user.id)
    await db.delete(user)
    await db.commit()
    logger.info("User account deleted", extra={"user_id": user_id})
    return {"success": True, "message": "User account deleted successfully"}
