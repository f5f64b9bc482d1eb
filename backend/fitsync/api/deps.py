"""Route Dependencies — current user resolution and the shared suggestion engine.

Invariants:
    - No Authorization header / no bearer token → 401 "Access token required"
    - Bad or expired token → 403 "Invalid or expired token"
    - Valid token for a deleted user → 404 "User not found"
    - One SuggestionEngine per process, built lazily from settings
"""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fitsync.config import get_settings
from fitsync.core.errors import AuthenticationError, ResourceNotFoundError
from fitsync.infrastructure.anthropic_client import ResilientAnthropicClient
from fitsync.infrastructure.database import get_db
from fitsync.infrastructure.security import decode_access_token
from fitsync.models.user import User
from fitsync.services.suggestion_engine import SuggestionEngine


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


async def get_user_by_id(user_id: UUID, db: AsyncSession) -> User | None:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_current_user(
    authorization: str | None = Header(None),
    db: AsyncSession = Depends(get_db),
) -> User:
    token = _bearer_token(authorization)
    if not token:
        raise AuthenticationError()
    user = await get_user_by_id(decode_access_token(token), db)
    if not user:
        raise ResourceNotFoundError("User not found")
    return user


_engine: SuggestionEngine | None = None


def get_suggestion_engine() -> SuggestionEngine:
    global _engine
    if _engine is None:
        settings = get_settings()
        client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
        _engine = SuggestionEngine(
            client,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        )
    return _engine
