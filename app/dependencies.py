# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Everything here is read from request.app.state, which create_app() fills
# once at startup. Handlers never reach for module-level globals.
# =============================================================================

from typing import Annotated, AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from lib.database import Database


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings


def get_database(request: Request) -> Database:
    """The application's Database (engine + session factory)."""
    return request.app.state.database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncIterator[AsyncSession]:
    """
    Yield one AsyncSession for the duration of a request.

    Rolls back if the handler raises.
    """
    async with database.session() as session:
        yield session


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
DatabaseDep = Annotated[Database, Depends(get_database)]
SessionDep = Annotated[AsyncSession, Depends(get_db)]
