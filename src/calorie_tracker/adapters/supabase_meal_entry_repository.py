"""Supabase repository for meal entries."""

from dataclasses import dataclass
from datetime import date, datetime, time
from uuid import UUID

from supabase import Client

from calorie_tracker.adapters.supabase_food_repository import FOOD_COLUMNS, parse_food
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.services.meals import MealEntryRepository

_COLUMNS = f"id, user_id, entry_date, entry_time, created_at, food:foods({FOOD_COLUMNS})"


@dataclass
class SupabaseMealEntryRepository(MealEntryRepository):
    """Supabase implementation for meal entries joined with their food."""

    client: Client

    def create_entry(
        self, user_id: UUID, food_id: UUID, entry_date: date, entry_time: time
    ) -> MealEntry:
        """Insert a meal entry and return it with the food embedded."""
        response = (
            self.client.table("meal_entries")
            .insert(
                {
                    "user_id": str(user_id),
                    "food_id": str(food_id),
                    "entry_date": entry_date.isoformat(),
                    "entry_time": entry_time.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal entry")
        created = self.get_entry(UUID(str(response.data[0]["id"])))
        if created is None:
            raise RuntimeError("Created meal entry could not be read back")
        return created

    def get_entry(self, entry_id: UUID) -> MealEntry | None:
        """Return a meal entry by id."""
        response = (
            self.client.table("meal_entries")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        """Return entries within the inclusive date range."""
        response = (
            self.client.table("meal_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("entry_date", start.isoformat())
            .lte("entry_date", end.isoformat())
            .order("entry_date", desc=False)
            .order("entry_time", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a meal entry row."""
        self.client.table("meal_entries").delete().eq("id", str(entry_id)).execute()


def _parse_entry(row: dict[str, object]) -> MealEntry:
    created_at = row.get("created_at")
    return MealEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        food=parse_food(row["food"]),
        entry_date=date.fromisoformat(str(row["entry_date"])),
        entry_time=time.fromisoformat(str(row["entry_time"])),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
