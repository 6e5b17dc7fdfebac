"""Dashboard view models."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.models import GoalType, MealType


@dataclass(frozen=True)
class DashboardSummary:
    """Calorie and weight summary for one user and one day."""

    day: date
    allowed_daily_intake: int
    consumed_calories: int
    remaining_calories: int
    user_name: str
    goal_type: GoalType
    current_weight: Decimal
    goal_weight: Decimal | None
    today_weight: Decimal | None
    meals_by_type: dict[MealType, list[MealEntry]] = field(default_factory=dict)
    total_meals_count: int = 0
