# src/studygroup_service/api/app.py
from contextlib import asynccontextmanager
from fastapi import FastAPI

from studygroup_service.config.settings import get_settings
from studygroup_service.api.middleware.request_id import RequestIDMiddleware
from studygroup_service.api.middleware.errors import register_error_handlers
from studygroup_service.api.routes import health
from studygroup_service.api import v1
from studygroup_service.infrastructure.database import db
from studygroup_service.infrastructure.observability.logging import configure_logging, get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    settings = get_settings()

    if settings.database_url:
        await db.connect(
            url=settings.database_url.get_secret_value(),
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
            echo_sql=settings.db_echo_sql,
        )
        logger.info(
            "Database connection established",
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
        )
    else:
        logger.warning("Database not configured - settings endpoints will fail")

    yield

    if db.is_connected:
        await db.disconnect()
        logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Application factory."""
    settings = get_settings()
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
# Study Group Service API

Account settings for study group members.

## Features

- **Profile**: view and edit the short bio (35 characters at most)
- **Tags**: attach and detach interest tags; new titles are created on first use
- **Password**: change the password with a confirmation field

## Identifying the account

Every settings request names the signed-in account in a header:

```
X-Account-Nickname: jordan
```
        """,
        docs_url="/docs" if settings.debug else None,
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Health",
                "description": "Liveness and readiness endpoints.",
            },
            {
                "name": "Settings",
                "description": "Profile, tag and password settings for the current account.",
            },
        ],
    )

    # Request ID should be first so it's available to the error handlers
    app.add_middleware(RequestIDMiddleware)

    register_error_handlers(app)

    # Health routes (no versioning - kept at root level)
    app.include_router(health.router, tags=["Health"])

    # API v1 routes
    app.include_router(v1.router, prefix="/api/v1")

    return app


app = create_app()
