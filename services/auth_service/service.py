"""Account registration, login and logout."""

import uuid
from typing import Optional

from libs.auth.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from libs.auth.sessions import AuthSession, open_session, revoke_session
from libs.common.config import get_settings
from libs.common.errors import AuthError, NotFoundError, ValidationError
from libs.common.logging import get_logger
from services.auth_service.models import User, UserRole
from services.auth_service.schemas import LoginRequest, RegisterRequest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.lower()))
    return result.scalar_one_or_none()


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError(f"No user with id: {user_id}")
    return user


async def register(db: AsyncSession, data: RegisterRequest) -> User:
    """
    Create an account. The first account, and any account registered with
    ADMIN_EMAIL, is an admin.
    """
    settings = get_settings()
    email = data.email.lower()

    if len(data.password) < settings.MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.MIN_PASSWORD_LENGTH} characters"
        )
    if await get_user_by_email(db, email):
        raise ValidationError("Email already exists")

    existing_accounts = await db.scalar(select(func.count()).select_from(User))
    is_admin = existing_accounts == 0 or email == settings.ADMIN_EMAIL

    user = User(
        name=data.name,
        email=email,
        password_hash=hash_password(data.password),
        role=UserRole.ADMIN if is_admin else UserRole.USER,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info(f"Registered account {user.id} with role {user.role.value}")
    return user


async def authenticate(
    db: AsyncSession, credentials: LoginRequest
) -> tuple[User, AuthSession, str]:
    """
    Check credentials and open a server-side session.
    Returns the user, the session and the signed access token.
    """
    user = await get_user_by_email(db, credentials.email)
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Rejected login attempt")
        raise AuthError("Invalid credentials")

    session = await open_session(db, user.id)
    token = create_access_token(
        user_id=user.id,
        session_id=session.id,
        role=user.role.value,
        email=user.email,
        name=user.name,
        expires_at=session.expires_at,
    )
    await db.commit()
    logger.info(f"Opened session {session.id} for user {user.id}")
    return user, session, token


async def logout(db: AsyncSession, token: Optional[str]) -> bool:
    """
    Revoke the session behind a token. Invalid or missing tokens are
    ignored so logout always succeeds.
    """
    if not token:
        return False
    try:
        payload = decode_access_token(token)
        session_id = uuid.UUID(payload["sid"])
    except (AuthError, KeyError, ValueError):
        return False

    revoked = await revoke_session(db, session_id)
    if revoked:
        logger.info(f"Revoked session {session_id}")
    return revoked
