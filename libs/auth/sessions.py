"""Server-side session records backing issued access tokens.

A token is only honoured while its session row exists, is not revoked and
has not expired, so logging out invalidates the token immediately.
"""

import uuid
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import DateTime, Uuid, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Mapped, mapped_column

from libs.common.config import get_settings
from libs.common.datetime_utils import ensure_utc, utc_now
from libs.db.base import Base


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )

    def is_active(self, now: Optional[datetime] = None) -> bool:
        now = now or utc_now()
        return self.revoked_at is None and ensure_utc(self.expires_at) > now

    def __repr__(self):
        return f"<AuthSession {self.id} user={self.user_id}>"


async def open_session(db: AsyncSession, user_id: uuid.UUID) -> AuthSession:
    settings = get_settings()
    session = AuthSession(
        id=uuid.uuid4(),
        user_id=user_id,
        expires_at=utc_now() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    db.add(session)
    await db.flush()
    return session


async def get_session(db: AsyncSession, session_id: uuid.UUID) -> Optional[AuthSession]:
    result = await db.execute(select(AuthSession).where(AuthSession.id == session_id))
    return result.scalar_one_or_none()


async def revoke_session(db: AsyncSession, session_id: uuid.UUID) -> bool:
    """Mark a session revoked. Returns False when it was unknown or already revoked."""
    session = await get_session(db, session_id)
    if session is None or session.revoked_at is not None:
        return False
    session.revoked_at = utc_now()
    await db.commit()
    return True
