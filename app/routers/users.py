# =============================================================================
# app/routers/users.py - Registration, Login and Current User
# =============================================================================
# Endpoints:
#   POST /users         - register (public)
#   POST /users/login   - log in (public)
#   GET  /user          - current user (auth)
#   PUT  /user          - update current user (auth)
# =============================================================================

from fastapi import APIRouter, Depends, status

from app.auth import AuthUser, TokenCodec, get_current_user, get_token_codec
from app.dependencies import SessionDep
from core.models.user import (
    LoginUserRequest,
    NewUserRequest,
    UpdateUserRequest,
    UserEnvelope,
)
from core.services.user_service import UserService

router = APIRouter()


@router.post("/users", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
async def register(
    request: NewUserRequest,
    session: SessionDep,
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Register a new user.

    Returns the user with a token, so the client is logged in immediately.
    409 if the username or email is already taken.
    """
    user = await UserService.register(session, codec, request.user)
    return UserEnvelope(user=user)


@router.post("/users/login", response_model=UserEnvelope)
async def login(
    request: LoginUserRequest,
    session: SessionDep,
    codec: TokenCodec = Depends(get_token_codec),
):
    """
    Exchange email and password for a token.

    401 for an unknown email or a wrong password.
    """
    user = await UserService.login(session, codec, request.user)
    return UserEnvelope(user=user)


@router.get("/user", response_model=UserEnvelope)
async def get_current(
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """Return the authenticated user."""
    current = await UserService.get_current_user(session, user.id, user.token)
    return UserEnvelope(user=current)


@router.put("/user", response_model=UserEnvelope)
async def update_current(
    request: UpdateUserRequest,
    session: SessionDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update the authenticated user.

    Accepts any subset of email, username, password, bio and image.
    """
    updated = await UserService.update_user(session, user.id, user.token, request.user)
    return UserEnvelope(user=updated)
