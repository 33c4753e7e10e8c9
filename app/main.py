# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Conduit API.
# create_app() configures the FastAPI application with middleware, routers
# and handlers, and wires the settings, database and token codec onto
# app.state for the dependencies in app/dependencies.py.
#
# Usage:
#   uvicorn app.main:app --reload
#   python scripts/run_server.py --seed
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app import __version__
from app.auth.security import TokenCodec
from app.config import Settings, get_settings
from app.exceptions import (
    ConduitException,
    conduit_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from app.routers import articles, comments, health, profiles, tags, users
from lib.database import Database
from lib.seed import empty_all_tables, populate_seeds

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

DESCRIPTION = """
## Conduit API

Backend for **Conduit**, a Medium-style blogging platform following the
RealWorld API contract.

### Authentication

Register (`POST /api/users`) or log in (`POST /api/users/login`) to get a
token, then send it on every request:

```
Authorization: Token <jwt>
```

### Errors

Every error uses the same envelope:

```json
{"errors": {"body": ["Article not found: how-to-train-your-dragon"]}, "code": "ARTICLE_NOT_FOUND"}
```
"""


def configure_logging(settings: Settings) -> None:
    """Configure root logging once per process."""
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create missing tables, optionally reseed sample data
    - Shutdown: Dispose of the connection pool
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info(f"Starting Conduit API in {settings.ENVIRONMENT} mode")
    logger.info(f"Database backend: {database.backend}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    await database.create_all()

    if settings.SEED_DATABASE:
        logger.info("SEED_DATABASE is set, replacing data with sample seeds")
        async with database.session() as session:
            await empty_all_tables(session)
            await populate_seeds(session)

    yield

    # Shutdown
    logger.info("Shutting down Conduit API")
    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build a configured application.

    Args:
        settings: Explicit settings; defaults to the cached environment settings

    Returns:
        A FastAPI app with its own Database and TokenCodec
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Conduit API",
        description=DESCRIPTION,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {
                "name": "Users",
                "description": "Registration, login and the current user",
            },
            {
                "name": "Profiles",
                "description": "Public profiles and following",
            },
            {
                "name": "Articles",
                "description": "Articles, feed and favorites",
            },
            {
                "name": "Comments",
                "description": "Comments on articles",
            },
            {
                "name": "Tags",
                "description": "Tag vocabulary",
            },
            {
                "name": "Health",
                "description": "API health and readiness checks",
            },
        ],
    )

    app.state.settings = settings
    app.state.database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    app.state.token_codec = TokenCodec(
        secret=settings.SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM,
        expire_seconds=settings.TOKEN_EXPIRE_SECONDS,
    )

    # =========================================================================
    # Middleware
    # =========================================================================

    # CORS middleware - allows cross-origin requests
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    app.add_exception_handler(ConduitException, conduit_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(users.router, prefix=API_PREFIX, tags=["Users"])
    app.include_router(profiles.router, prefix=API_PREFIX, tags=["Profiles"])
    app.include_router(articles.router, prefix=API_PREFIX, tags=["Articles"])
    app.include_router(comments.router, prefix=API_PREFIX, tags=["Comments"])
    app.include_router(tags.router, prefix=API_PREFIX, tags=["Tags"])
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

    # =========================================================================
    # Root Endpoint
    # =========================================================================

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "Conduit API",
            "version": __version__,
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    return app


app = create_app()
