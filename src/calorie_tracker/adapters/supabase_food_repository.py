"""Supabase repository for the food library."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.models import MealType
from calorie_tracker.services.foods import FoodRepository

FOOD_COLUMNS = "id, name, image, meal_type, calories, user_id, created_at"


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase implementation for foods."""

    client: Client

    def get_food(self, food_id: UUID) -> Food | None:
        """Return a food by id."""
        response = (
            self.client.table("foods")
            .select(FOOD_COLUMNS)
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def list_available(
        self, user_id: UUID, meal_type: MealType | None = None
    ) -> list[Food]:
        """Return system foods and the user's own foods."""
        query = (
            self.client.table("foods")
            .select(FOOD_COLUMNS)
            .or_(f"user_id.is.null,user_id.eq.{user_id}")
        )
        if meal_type is not None:
            query = query.eq("meal_type", meal_type.value)
        response = query.order("name", desc=False).execute()
        return [parse_food(row) for row in response.data or []]

    def list_custom(self, user_id: UUID) -> list[Food]:
        """Return foods owned by the user."""
        response = (
            self.client.table("foods")
            .select(FOOD_COLUMNS)
            .eq("user_id", str(user_id))
            .order("name", desc=False)
            .execute()
        )
        return [parse_food(row) for row in response.data or []]

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        """Insert a custom food."""
        payload = _draft_payload(draft)
        payload["user_id"] = str(user_id)
        response = self.client.table("foods").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create food")
        return parse_food(response.data[0])

    def update_food(self, food_id: UUID, draft: FoodDraft) -> Food:
        """Update a food row."""
        response = (
            self.client.table("foods")
            .update(_draft_payload(draft))
            .eq("id", str(food_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update food")
        return parse_food(response.data[0])

    def delete_food(self, food_id: UUID) -> None:
        """Delete a food row."""
        self.client.table("foods").delete().eq("id", str(food_id)).execute()


def _draft_payload(draft: FoodDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "image": draft.image,
        "meal_type": draft.meal_type.value,
        "calories": draft.calories,
    }


def parse_food(row: dict[str, object]) -> Food:
    """Build a Food from a foods row."""
    owner = row.get("user_id")
    created_at = row.get("created_at")
    return Food(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        meal_type=MealType(row["meal_type"]),
        calories=int(row.get("calories", 0)),
        user_id=UUID(str(owner)) if owner else None,
        image=row.get("image"),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
