"""Domain models for the food library."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from calorie_tracker.domain.models import MealType


@dataclass(frozen=True)
class Food:
    """A food item; system foods have no owner."""

    id: UUID
    name: str
    meal_type: MealType
    calories: int
    user_id: UUID | None = None
    image: str | None = None
    created_at: datetime | None = None

    @property
    def is_custom(self) -> bool:
        """Return True when the food belongs to a single user."""
        return self.user_id is not None

    def visible_to(self, user_id: UUID) -> bool:
        """Return True for system foods and the owner's custom foods."""
        return self.user_id is None or self.user_id == user_id


@dataclass(frozen=True)
class FoodDraft:
    """Fields supplied when creating or editing a custom food."""

    name: str
    meal_type: MealType
    calories: int
    image: str | None = None
