"""Auth router - registration, login and logout."""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response
from fastapi.security import HTTPAuthorizationCredentials
from libs.auth.dependencies import extract_token, get_current_user, security
from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.datetime_utils import utc_now
from libs.common.rate_limit import auth_limit
from libs.db.session import get_async_db
from services.auth_service import service as auth_service
from services.auth_service.schemas import (
    CurrentUserResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserResponse,
)
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()


@router.post("/register", response_model=RegisterResponse)
@auth_limit
async def register(
    request: Request,
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """Create an account."""
    user = await auth_service.register(db, payload)
    return RegisterResponse(
        msg="Success! Account created, please log in",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=LoginResponse)
@auth_limit
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_async_db),
):
    """
    Open a session. The token is returned in the body and also set as an
    http-only cookie for browser clients.
    """
    user, session, token = await auth_service.authenticate(db, credentials)
    max_age = int((session.expires_at - utc_now()).total_seconds())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=max_age,
        httponly=True,
        samesite="lax",
        secure=settings.ENVIRONMENT == "production",
    )
    return LoginResponse(user=UserResponse.model_validate(user), access_token=token)


@router.delete("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_async_db),
):
    """End the current session."""
    await auth_service.logout(db, extract_token(request, credentials))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(msg="User logged out!")


@router.get("/me", response_model=CurrentUserResponse)
async def show_current_user(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
):
    """Return the account behind the current session."""
    user = await auth_service.get_user(db, current_user.user_id)
    return CurrentUserResponse(user=UserResponse.model_validate(user))
