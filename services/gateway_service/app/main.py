"""FastAPI application entrypoint for the Church Portal API.

All routers are served in-process under the configured API prefix.
"""

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

load_dotenv()

from libs.common.config import get_settings  # noqa: E402
from libs.common.error_handler import add_exception_handlers  # noqa: E402
from libs.common.middleware import add_observability_middleware  # noqa: E402
from libs.common.rate_limit import limiter, rate_limit_exceeded_handler  # noqa: E402
from services.attendance_service.router import router as attendance_router  # noqa: E402
from services.auth_service.router import router as auth_router  # noqa: E402
from services.members_service.router import router as members_router  # noqa: E402
from services.worship_service.router import (  # noqa: E402
    churchday_router,
    services_router,
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance."""
    settings = get_settings()
    app = FastAPI(
        title="Church Portal API",
        version="0.1.0",
        description="Members, services, church days and attendance for church admins.",
    )

    # Add rate limiter state to app
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    # Applies DEFAULT_RATE_LIMIT to every route; auth routes carry their own
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability (structured logging + request tracing)
    add_observability_middleware(app)

    # Add global exception handlers for consistent error responses
    add_exception_handlers(app)

    @app.get("/health", tags=["system"])
    async def health_check() -> dict[str, str]:
        """Simple readiness endpoint."""
        return {"status": "ok"}

    for router in (
        auth_router,
        members_router,
        services_router,
        churchday_router,
        attendance_router,
    ):
        app.include_router(router, prefix=settings.API_PREFIX)

    return app


app = create_app()
