"""Meal logging service."""

from dataclasses import dataclass
from datetime import date, time
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import NotFoundError
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.services.foods import FoodService


class MealEntryRepository(Protocol):
    """Persistence interface for meal entries."""

    def create_entry(
        self, user_id: UUID, food_id: UUID, entry_date: date, entry_time: time
    ) -> MealEntry:
        """Create a meal entry and return it with its food."""

    def get_entry(self, entry_id: UUID) -> MealEntry | None:
        """Return a meal entry by id, if present."""

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return entries in an inclusive date range, ordered by date and time."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a meal entry."""


@dataclass
class MealEntryService:
    """Service for logging and querying meals."""

    repository: MealEntryRepository
    food_service: FoodService

    def log_meal(
        self, user_id: UUID, food_id: UUID, entry_date: date, entry_time: time
    ) -> MealEntry:
        """Log a food the user can see at a date and time."""
        food = self.food_service.get(user_id, food_id)
        return self.repository.create_entry(user_id, food.id, entry_date, entry_time)

    def list_for_date(self, user_id: UUID, day: date) -> list[MealEntry]:
        """Return the day's entries ordered by time."""
        return self.repository.list_entries(user_id, day, day)

    def list_for_range(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return entries between two dates inclusive."""
        return self.repository.list_entries(user_id, start, end)

    def get(self, user_id: UUID, entry_id: UUID) -> MealEntry:
        """Return an entry owned by the user."""
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Meal entry not found with id: {entry_id}")
        return entry

    def delete(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user."""
        entry = self.get(user_id, entry_id)
        self.repository.delete_entry(entry.id)

    def total_calories_for_date(self, user_id: UUID, day: date) -> int:
        """Sum the calories of the day's foods."""
        return total_calories(self.list_for_date(user_id, day))


def total_calories(entries: list[MealEntry]) -> int:
    """Sum food calories over entries; an empty list sums to 0."""
    return sum(entry.food.calories for entry in entries)
