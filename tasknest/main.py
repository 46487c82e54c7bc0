"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers.
No business logic here. See tasknest.core.lifespan and
tasknest.core.exception_handlers.

Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling create_app().
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from tasknest.api.v1 import api_router
from tasknest.application.interfaces.repositories import ITaskStore
from tasknest.core.config import get_settings
from tasknest.core.exception_handlers import register_exception_handlers
from tasknest.core.lifespan import create_lifespan
from tasknest.core.limiter import limiter
from tasknest.middleware import RequestIDMiddleware
from tasknest.shared.logging import setup_logging


def create_app(task_store: ITaskStore | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        task_store: Store to serve from; if None the lifespan builds the one
            selected by DATABASE_BACKEND.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.task_store = task_store

    limiter.enabled = settings.rate_limit_enabled
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost, so the request ID wraps CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()
