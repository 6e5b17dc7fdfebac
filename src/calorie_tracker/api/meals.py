"""Meal entry endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import MealEntryRequest, MealEntryResponse

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/meal-entries", tags=["meals"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_meal(
    payload: MealEntryRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> MealEntryResponse:
    """Log a food at a date and time."""
    container: AppContainer = request.app.state.container
    entry = container.meal_service.log_meal(
        user_id, payload.food_id, payload.entry_date, payload.entry_time
    )
    return MealEntryResponse.from_domain(entry)


@router.get("/today")
async def list_today(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> list[MealEntryResponse]:
    """Return today's meals."""
    container: AppContainer = request.app.state.container
    entries = container.meal_service.list_for_date(user_id, container.today())
    return [MealEntryResponse.from_domain(entry) for entry in entries]


@router.get("/range")
async def list_range(
    start: date,
    end: date,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> list[MealEntryResponse]:
    """Return meals between two dates inclusive."""
    container: AppContainer = request.app.state.container
    entries = container.meal_service.list_for_range(user_id, start, end)
    return [MealEntryResponse.from_domain(entry) for entry in entries]


@router.get("/date/{day}")
async def list_for_date(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> list[MealEntryResponse]:
    """Return the meals of a day."""
    container: AppContainer = request.app.state.container
    entries = container.meal_service.list_for_date(user_id, day)
    return [MealEntryResponse.from_domain(entry) for entry in entries]


@router.get("/date/{day}/calories")
async def calories_for_date(
    day: date, request: Request, user_id: UUID = Depends(current_user_id)
) -> int:
    """Return the calories consumed on a day."""
    container: AppContainer = request.app.state.container
    return container.dashboard.total_calories_for_date(user_id, day)


@router.get("/{entry_id}")
async def get_meal(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> MealEntryResponse:
    """Return a single meal entry."""
    container: AppContainer = request.app.state.container
    return MealEntryResponse.from_domain(container.meal_service.get(user_id, entry_id))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal(
    entry_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a meal entry."""
    container: AppContainer = request.app.state.container
    container.meal_service.delete(user_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
