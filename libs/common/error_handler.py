"""Global exception handlers.

All error bodies share one shape, ``{"msg": "..."}``, which is what the
admin frontend reads.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from libs.common.config import get_settings
from libs.common.errors import AuthError, ChurchPortalError
from libs.common.logging import get_logger

logger = get_logger(__name__)


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        # Drop the leading "body"/"query"/"path" segment
        loc = ".".join(str(p) for p in error.get("loc", ())[1:])
        parts.append(f"{loc}: {error.get('msg')}" if loc else str(error.get("msg")))
    return "; ".join(parts) or "Invalid request"


async def portal_error_handler(request: Request, exc: ChurchPortalError) -> JSONResponse:
    headers = None
    if isinstance(exc, AuthError) and exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=exc.status_code, content={"msg": exc.message}, headers=headers
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"msg": _format_validation_errors(exc)},
    )


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = "Route does not exist"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": message},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    settings = get_settings()
    message = (
        str(exc)
        if settings.ENVIRONMENT == "local"
        else "Something went wrong, try again later"
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"msg": message}
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register the portal's exception handlers on an app."""
    app.add_exception_handler(ChurchPortalError, portal_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
