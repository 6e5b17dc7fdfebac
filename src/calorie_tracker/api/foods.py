"""Food library endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from calorie_tracker.api.auth import current_user_id
from calorie_tracker.api.schemas import FoodRequest, FoodResponse
from calorie_tracker.domain.models import MealType  # noqa: TC001

if TYPE_CHECKING:
    from calorie_tracker.containers import AppContainer

router = APIRouter(prefix="/foods", tags=["foods"])


@router.get("")
async def list_foods(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> list[FoodResponse]:
    """Return system foods and the caller's custom foods."""
    container: AppContainer = request.app.state.container
    return [
        FoodResponse.from_domain(food)
        for food in container.food_service.list_available(user_id)
    ]


@router.get("/custom")
async def list_custom_foods(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> list[FoodResponse]:
    """Return only the caller's custom foods."""
    container: AppContainer = request.app.state.container
    return [
        FoodResponse.from_domain(food)
        for food in container.food_service.list_custom(user_id)
    ]


@router.get("/meal-type/{meal_type}")
async def list_foods_by_meal_type(
    meal_type: MealType, request: Request, user_id: UUID = Depends(current_user_id)
) -> list[FoodResponse]:
    """Return visible foods for a meal type."""
    container: AppContainer = request.app.state.container
    return [
        FoodResponse.from_domain(food)
        for food in container.food_service.list_by_meal_type(user_id, meal_type)
    ]


@router.get("/{food_id}")
async def get_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> FoodResponse:
    """Return a single food."""
    container: AppContainer = request.app.state.container
    return FoodResponse.from_domain(container.food_service.get(user_id, food_id))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food(
    payload: FoodRequest, request: Request, user_id: UUID = Depends(current_user_id)
) -> FoodResponse:
    """Create a custom food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.create(user_id, payload.to_draft())
    return FoodResponse.from_domain(food)


@router.put("/{food_id}")
async def update_food(
    food_id: UUID,
    payload: FoodRequest,
    request: Request,
    user_id: UUID = Depends(current_user_id),
) -> FoodResponse:
    """Edit a custom food."""
    container: AppContainer = request.app.state.container
    food = container.food_service.update(user_id, food_id, payload.to_draft())
    return FoodResponse.from_domain(food)


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: UUID, request: Request, user_id: UUID = Depends(current_user_id)
) -> Response:
    """Delete a custom food."""
    container: AppContainer = request.app.state.container
    container.food_service.delete(user_id, food_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
