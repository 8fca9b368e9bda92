"""FastAPI application entry point.

Wiring only: logging, lifespan, exception handlers, middleware, routers.
See app.core.lifespan (reminder scheduler) and app.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env before
importing this module.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from app.api.v1 import api_router
from app.core.config import Settings, get_settings
from app.core.exception_handlers import register_exception_handlers
from app.core.lifespan import create_lifespan
from app.core.limiter import limiter
from app.middleware import RequestIDMiddleware, RequestSizeLimitMiddleware
from app.shared.telemetry.logging import setup_logging


def _cors_origins(settings: Settings) -> list[str]:
    return [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]


def _install_middleware(app: FastAPI, settings: Settings) -> None:
    """Last added is outermost: size limit, then request ID, then CORS."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        # Attachment downloads read the file name from Content-Disposition.
        expose_headers=[settings.request_id_header, "Content-Disposition"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(RequestSizeLimitMiddleware, max_bytes=settings.max_request_size)


def create_app() -> FastAPI:
    """Build the ARSANA API application."""
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


app = create_app()
