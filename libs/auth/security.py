"""Password hashing and session token helpers.

bcrypt only uses the first 72 bytes of a password; longer secrets are
truncated explicitly so hashing never raises on long input.
"""

import uuid
from datetime import datetime
from typing import Any

import bcrypt
from jose import JWTError, jwt

from libs.common.config import get_settings
from libs.common.errors import AuthError


def _to_bcrypt_secret(password: str) -> bytes:
    secret = password.encode("utf-8")
    if len(secret) > 72:
        secret = secret[:72]
    return secret


def hash_password(password: str) -> str:
    """Return a bcrypt hash as a UTF-8 string."""
    salt = bcrypt.gensalt(rounds=get_settings().BCRYPT_ROUNDS)
    return bcrypt.hashpw(_to_bcrypt_secret(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(_to_bcrypt_secret(password), password_hash.encode("utf-8"))


def create_access_token(
    *,
    user_id: uuid.UUID,
    session_id: uuid.UUID,
    role: str,
    email: str,
    name: str,
    expires_at: datetime,
) -> str:
    settings = get_settings()
    claims = {
        "sub": str(user_id),
        "sid": str(session_id),
        "role": role,
        "email": email,
        "name": name,
        "exp": expires_at,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry; raise AuthError on any failure."""
    settings = get_settings()
    try:
        return jwt.decode(
            token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as exc:
        raise AuthError("Authentication invalid") from exc
