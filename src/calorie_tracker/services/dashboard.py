"""Daily dashboard aggregation."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from calorie_tracker.domain.dashboard import DashboardSummary
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.models import MealType
from calorie_tracker.services.meals import MealEntryService, total_calories
from calorie_tracker.services.users import UserService
from calorie_tracker.services.weights import WeightLedger


@dataclass
class DailySummaryAggregator:
    """Builds the dashboard for a user and a calendar day."""

    user_service: UserService
    meal_service: MealEntryService
    weight_ledger: WeightLedger

    def summarize(self, user_id: UUID, day: date) -> DashboardSummary:
        """Return consumed/remaining calories and the day's meals by type."""
        user = self.user_service.get_profile(user_id)
        entries = self.meal_service.list_for_date(user_id, day)
        consumed = total_calories(entries)
        today_entry = self.weight_ledger.find_by_date(user_id, day)
        return DashboardSummary(
            day=day,
            allowed_daily_intake=user.allowed_daily_intake,
            consumed_calories=consumed,
            remaining_calories=user.allowed_daily_intake - consumed,
            user_name=user.name,
            goal_type=user.goal_type,
            current_weight=user.weight,
            goal_weight=user.goal,
            today_weight=today_entry.weight if today_entry else None,
            meals_by_type=_group_by_meal_type(entries),
            total_meals_count=len(entries),
        )

    def total_calories_for_date(self, user_id: UUID, day: date) -> int:
        """Return only the consumed calories for the day."""
        return self.meal_service.total_calories_for_date(user_id, day)


def _group_by_meal_type(entries: list[MealEntry]) -> dict[MealType, list[MealEntry]]:
    grouped: dict[MealType, list[MealEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.food.meal_type, []).append(entry)
    return grouped
