"""Services for the food library."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import InvalidInputError, NotFoundError
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.models import MealType


class FoodRepository(Protocol):
    """Persistence interface for foods."""

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id, if present."""

    def list_available(
        self, user_id: UUID, meal_type: MealType | None = None
    ) -> list[Food]:
        """Return system foods plus the user's custom foods."""

    def list_custom(self, user_id: UUID) -> list[Food]:
        """Return foods owned by the user."""

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Create a custom food and return it."""

    def update_food(self, food_id: UUID, draft: FoodDraft) -> Food:
        """Update a food and return it."""

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food."""


@dataclass
class FoodService:
    """Application service for system and custom foods."""

    repository: FoodRepository

    def list_available(self, user_id: UUID) -> list[Food]:
        """Return every food the user can log."""
        return self.repository.list_available(user_id)

    def list_by_meal_type(self, user_id: UUID, meal_type: MealType) -> list[Food]:
        """Return visible foods tagged with a meal type."""
        return self.repository.list_available(user_id, meal_type)

    def list_custom(self, user_id: UUID) -> list[Food]:
        """Return the user's own foods."""
        return self.repository.list_custom(user_id)

    def get(self, user_id: UUID, food_id: UUID) -> Food:
        """Return a food visible to the user."""
        food = self.repository.get_food(food_id)
        if food is None or not food.visible_to(user_id):
            raise NotFoundError(f"Food not found with id: {food_id}")
        return food

    def create(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Create a custom food owned by the user."""
        return self.repository.create_food(user_id, draft)

    def update(self, user_id: UUID, food_id: UUID, draft: FoodDraft) -> Food:
        """Edit one of the user's custom foods.

        Logged meals read calories through the food, so past totals change too.
        """
        food = self._owned(user_id, food_id)
        return self.repository.update_food(food.id, draft)

    def delete(self, user_id: UUID, food_id: UUID) -> None:
        """Delete one of the user's custom foods."""
        food = self._owned(user_id, food_id)
        self.repository.delete_food(food.id)

    def _owned(self, user_id: UUID, food_id: UUID) -> Food:
        food = self.get(user_id, food_id)
        if not food.is_custom:
            raise InvalidInputError("System foods cannot be modified")
        return food
