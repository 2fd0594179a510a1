"""ASGI entry point: ``uvicorn leaddesk.main:create_app --factory``.

Settings are read inside create_app() so tests can adjust the environment
(and clear the get_settings cache) before building an app.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from leaddesk.api.v1 import api_router
from leaddesk.core.config import Settings, get_settings
from leaddesk.core.exception_handlers import register_exception_handlers
from leaddesk.core.lifespan import create_lifespan
from leaddesk.core.limiter import limiter
from leaddesk.middleware import (
    CorrelationIDMiddleware,
    RequestIDMiddleware,
    TenantContextMiddleware,
    TimeoutMiddleware,
)
from leaddesk.shared.telemetry.logging import setup_logging


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    # Last added runs first: timeout > request id > correlation id > tenant reset > CORS.
    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type", settings.request_id_header],
        expose_headers=[settings.request_id_header, settings.correlation_id_header],
    )
    app.add_middleware(TenantContextMiddleware)
    app.add_middleware(CorrelationIDMiddleware, header_name=settings.correlation_id_header)
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)
    _install_middleware(app, settings)
    app.include_router(api_router, prefix="/api/v1")
    return app
