"""Rate limiting configuration for the portal API.

Uses slowapi. Storage defaults to in-process memory; point
RATE_LIMIT_STORAGE_URI at Redis when running more than one worker.
"""

from functools import lru_cache
from typing import Callable

from fastapi import Request, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.responses import JSONResponse

from libs.common.config import get_settings


def _get_client_ip(request: Request) -> str:
    """
    Client IP, honouring the first hop of X-Forwarded-For when proxied.
    """
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return get_remote_address(request)


@lru_cache
def get_limiter() -> Limiter:
    """
    Create and return a cached Limiter instance.
    """
    settings = get_settings()

    return Limiter(
        key_func=_get_client_ip,
        default_limits=[settings.DEFAULT_RATE_LIMIT],
        storage_uri=settings.RATE_LIMIT_STORAGE_URI,
        strategy="fixed-window",
        enabled=settings.RATE_LIMIT_ENABLED,
    )


limiter = get_limiter()


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> Response:
    """
    JSON 429 in the portal's error shape, with a Retry-After hint.
    """
    return JSONResponse(
        status_code=429,
        content={"msg": f"Too many requests, limit is {exc.detail}"},
        headers={"Retry-After": str(getattr(exc, "retry_after", 60))},
    )


def auth_limit(func: Callable) -> Callable:
    """Apply the strict limit configured for login/registration endpoints."""
    return limiter.limit(get_settings().AUTH_RATE_LIMIT)(func)
