"""Meal plan, review and advice endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import (
    AdviceChatRequest,
    AdviceChatResponse,
    CoachingResponse,
)

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(tags=["coaching"])


@router.get("/plan")
async def get_plan(
    request: Request, user_id: UUID = Depends(current_user_id), fresh: bool = False
) -> CoachingResponse:
    """Return the stored plan; with ``fresh`` regenerate it when stale."""
    container: AppContainer = request.app.state.container
    if fresh:
        reply = await container.coaching_service.ensure_fresh_plan(user_id)
    else:
        reply = container.coaching_service.get_plan(user_id)
    return CoachingResponse.from_domain(reply)


@router.post("/plan/generate")
async def generate_plan(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> CoachingResponse:
    """Generate a new meal plan."""
    container: AppContainer = request.app.state.container
    reply = await container.coaching_service.generate_plan(user_id)
    return CoachingResponse.from_domain(reply)


@router.get("/review")
async def get_review(
    request: Request, user_id: UUID = Depends(current_user_id), fresh: bool = False
) -> CoachingResponse:
    """Return the stored review; with ``fresh`` regenerate it when stale."""
    container: AppContainer = request.app.state.container
    if fresh:
        reply = await container.coaching_service.ensure_fresh_review(user_id)
    else:
        reply = container.coaching_service.get_review(user_id)
    return CoachingResponse.from_domain(reply)


@router.post("/review/generate")
async def generate_review(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> CoachingResponse:
    """Generate a new progress review."""
    container: AppContainer = request.app.state.container
    reply = await container.coaching_service.generate_review(user_id)
    return CoachingResponse.from_domain(reply)


@router.delete("/review", status_code=status.HTTP_204_NO_CONTENT)
async def delete_review(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete the stored review."""
    container: AppContainer = request.app.state.container
    container.coaching_service.delete_review(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/advice/chat")
async def advice_chat(
    payload: AdviceChatRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> AdviceChatResponse:
    """Answer a diet question."""
    container: AppContainer = request.app.state.container
    reply = await container.coaching_service.chat(
        user_id,
        payload.message,
        [turn.to_domain() for turn in payload.history],
    )
    return AdviceChatResponse(message=payload.message, response=reply)
