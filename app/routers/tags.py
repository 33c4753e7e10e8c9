# =============================================================================
# app/routers/tags.py - Tag Endpoints
# =============================================================================

from fastapi import APIRouter

from app.dependencies import SessionDep
from core.models.tag import TagList
from core.services.tag_service import TagService

router = APIRouter()


@router.get("/tags", response_model=TagList)
async def list_tags(session: SessionDep):
    """Every tag in use, alphabetical."""
    return await TagService.list_tags(session)
