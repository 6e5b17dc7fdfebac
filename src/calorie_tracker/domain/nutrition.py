"""Nutrition domain models."""

from dataclasses import dataclass
from decimal import Decimal

from calorie_tracker.domain.models import ActivityLevel, GoalType, Sex


@dataclass(frozen=True)
class ProfileInputs:
    """Biometrics, activity and goal needed to derive calorie targets."""

    weight: Decimal
    height: Decimal
    age: int
    sex: Sex
    activity_level: ActivityLevel
    weekly_goal: Decimal
    goal_type: GoalType


@dataclass(frozen=True)
class NutritionProfile:
    """Derived metrics for a user profile."""

    bmi: Decimal
    bmr: Decimal
    tdee: int
    allowance: int
