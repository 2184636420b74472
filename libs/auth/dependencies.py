from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from libs.auth.models import AuthUser
from libs.auth.security import decode_access_token
from libs.auth.sessions import get_session
from libs.common.config import get_settings
from libs.common.errors import AuthError, ForbiddenError
from libs.db.session import get_async_db

settings = get_settings()
security = HTTPBearer(auto_error=False)


def extract_token(
    request: Request, credentials: Optional[HTTPAuthorizationCredentials]
) -> Optional[str]:
    """Bearer header first, then the session cookie set at login."""
    if credentials and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


async def get_current_user(
    request: Request,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
    db: Annotated[AsyncSession, Depends(get_async_db)],
) -> AuthUser:
    """
    Validate the session token and return the authenticated user.
    """
    token = extract_token(request, credentials)
    if not token:
        raise AuthError("Authentication invalid")

    payload = decode_access_token(token)
    try:
        user = AuthUser(**payload)
    except ValidationError as exc:
        raise AuthError("Authentication invalid") from exc

    if user.session_id is None:
        raise AuthError("Authentication invalid")
    session = await get_session(db, user.session_id)
    if session is None or session.user_id != user.user_id or not session.is_active():
        raise AuthError("Session expired, please log in again")

    return user


async def require_admin(
    current_user: Annotated[AuthUser, Depends(get_current_user)]
) -> AuthUser:
    """
    Ensure the caller holds the admin role.
    """
    if not current_user.is_admin:
        raise ForbiddenError("Admin privileges required")
    return current_user
