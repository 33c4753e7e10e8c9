# =============================================================================
# app/routers/profiles.py - Profile & Follow Endpoints
# =============================================================================
# Endpoints:
#   GET    /profiles/{username}         - view a profile (optional auth)
#   POST   /profiles/{username}/follow  - follow (auth)
#   DELETE /profiles/{username}/follow  - unfollow (auth)
# =============================================================================

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path

from app.auth import AuthUser, get_current_user, get_current_user_optional
from app.dependencies import SessionDep
from core.models.profile import ProfileEnvelope
from core.services.profile_service import ProfileService

router = APIRouter()

UsernamePath = Annotated[str, Path(description="Username of the profile")]


@router.get("/profiles/{username}", response_model=ProfileEnvelope)
async def get_profile(
    username: UsernamePath,
    session: SessionDep,
    user: Optional[AuthUser] = Depends(get_current_user_optional),
):
    """
    Get a user's public profile.

    "following" reflects the caller; it is false for anonymous requests.
    """
    profile = await ProfileService.get_profile(
        session, username, viewer_id=user.id if user else None
    )
    return ProfileEnvelope(profile=profile)


@router.post("/profiles/{username}/follow", response_model=ProfileEnvelope)
async def follow_user(
    username: UsernamePath,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Follow a user. Following someone twice is harmless."""
    profile = await ProfileService.follow(session, username, user.id)
    return ProfileEnvelope(profile=profile)


@router.delete("/profiles/{username}/follow", response_model=ProfileEnvelope)
async def unfollow_user(
    username: UsernamePath,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Unfollow a user."""
    profile = await ProfileService.unfollow(session, username, user.id)
    return ProfileEnvelope(profile=profile)
