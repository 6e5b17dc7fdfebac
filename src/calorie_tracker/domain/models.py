"""Core domain models for the calorie tracker."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import StrEnum
from uuid import UUID


class Sex(StrEnum):
    """Biological sex used by the BMR formula."""

    MALE = "MALE"
    FEMALE = "FEMALE"


class ActivityLevel(StrEnum):
    """Activity level with its TDEE multiplier."""

    SEDENTARY = "SEDENTARY"
    LIGHTLY_ACTIVE = "LIGHTLY_ACTIVE"
    MODERATELY_ACTIVE = "MODERATELY_ACTIVE"
    VERY_ACTIVE = "VERY_ACTIVE"

    @property
    def multiplier(self) -> Decimal:
        """Return the factor applied to BMR."""
        return _ACTIVITY_MULTIPLIERS[self]


_ACTIVITY_MULTIPLIERS: dict[ActivityLevel, Decimal] = {
    ActivityLevel.SEDENTARY: Decimal("1.2"),
    ActivityLevel.LIGHTLY_ACTIVE: Decimal("1.375"),
    ActivityLevel.MODERATELY_ACTIVE: Decimal("1.55"),
    ActivityLevel.VERY_ACTIVE: Decimal("1.725"),
}


class GoalType(StrEnum):
    """Weight management goal."""

    LOSE = "LOSE"
    MAINTAIN = "MAINTAIN"
    GAIN = "GAIN"


class MealType(StrEnum):
    """Meal category tag on a food item."""

    BREAKFAST = "BREAKFAST"
    LUNCH = "LUNCH"
    DINNER = "DINNER"
    SNACKS = "SNACKS"
    OTHER = "OTHER"


@dataclass(frozen=True)
class UserProfile:
    """Represents a user stored in the database."""

    id: UUID
    name: str
    email: str
    dob: date
    sex: Sex
    weight: Decimal
    height: Decimal
    activity_level: ActivityLevel
    goal: Decimal | None
    goal_type: GoalType
    weekly_goal: Decimal
    bmi: Decimal
    allowed_daily_intake: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProfileDetails:
    """User-editable profile fields, without identity or derived values."""

    name: str
    dob: date
    sex: Sex
    weight: Decimal
    height: Decimal
    activity_level: ActivityLevel
    goal: Decimal | None
    weekly_goal: Decimal


@dataclass(frozen=True)
class Registration:
    """Data captured when a new user signs up."""

    email: str
    details: ProfileDetails
    goal_type: GoalType
