"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime, time
from uuid import UUID

from calorie_tracker.domain.foods import Food


@dataclass(frozen=True)
class MealEntry:
    """A logged meal; calories are read through the referenced food."""

    id: UUID
    user_id: UUID
    food: Food
    entry_date: date
    entry_time: time
    created_at: datetime | None = None

    @property
    def calories(self) -> int:
        """Calories of the referenced food."""
        return self.food.calories
