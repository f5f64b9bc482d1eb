"""Security Primitives — bcrypt password hashing and HS256 bearer tokens.

Invariants:
    - Plain passwords are never stored or logged
    - bcrypt always sees a fixed 44-byte SHA-256 digest, so passwords of any length hash
    - Token payload carries the user id under "userId" plus iat/exp
    - Any decode failure (bad signature, expiry, malformed) raises InvalidTokenError
"""

import base64
import hashlib
from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt

from fitsync.config import get_settings
from fitsync.core.errors import InvalidTokenError


def _prehash(plain: str) -> bytes:
    # base64 keeps NUL bytes out of bcrypt's input
    return base64.b64encode(hashlib.sha256(plain.encode("utf-8")).digest())


def hash_password(plain: str, rounds: int | None = None) -> str:
    rounds = rounds or get_settings().bcrypt_rounds
    hashed = bcrypt.hashpw(_prehash(plain), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_prehash(plain), hashed.encode("utf-8"))
    except ValueError:
        # malformed hash in the database
        return False


def create_access_token(user_id: UUID | str, expires_in: timedelta | None = None) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "iat": now,
        "exp": now + (expires_in or timedelta(days=settings.jwt_expiry_days)),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> UUID:
    """Return the user id embedded in a valid token."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
        return UUID(str(payload["userId"]))
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise InvalidTokenError()
