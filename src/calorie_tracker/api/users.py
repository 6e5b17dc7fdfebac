"""User registration and profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import (
    ProfileResponse,
    ProfileUpdateRequest,
    RegistrationRequest,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: RegistrationRequest, request: Request) -> ProfileResponse:
    """Create a user and compute their calorie targets."""
    container: AppContainer = request.app.state.container
    user = container.user_service.register(payload.to_registration())
    return ProfileResponse.from_domain(user)


@router.get("/profile")
async def get_profile(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> ProfileResponse:
    """Return the caller's profile."""
    container: AppContainer = request.app.state.container
    return ProfileResponse.from_domain(container.user_service.get_profile(user_id))


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdateRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> ProfileResponse:
    """Edit the caller's profile and recompute derived fields."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_profile(user_id, payload.to_details())
    return ProfileResponse.from_domain(user)
