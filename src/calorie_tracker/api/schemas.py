"""Request and response models for the HTTP API."""

from datetime import date, datetime, time
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from calorie_tracker.domain.coaching import ChatMessage, CoachingReply
from calorie_tracker.domain.dashboard import DashboardSummary
from calorie_tracker.domain.foods import Food, FoodDraft
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.models import (
    ActivityLevel,
    GoalType,
    MealType,
    ProfileDetails,
    Registration,
    Sex,
    UserProfile,
)
from calorie_tracker.domain.weights import WeightEntry

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ProfileFields(BaseModel):
    """Editable profile fields with the accepted ranges."""

    name: str = Field(min_length=2, max_length=100)
    dob: date
    sex: Sex
    weight: Decimal = Field(ge=20, le=500)
    height: Decimal = Field(ge=50, le=300)
    activity_level: ActivityLevel
    goal: Decimal | None = Field(default=None, ge=20, le=500)
    weekly_goal: Decimal = Field(ge=Decimal("0.1"), le=Decimal("1.0"))

    def to_details(self) -> ProfileDetails:
        """Convert to the domain model."""
        return ProfileDetails(
            name=self.name,
            dob=self.dob,
            sex=self.sex,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
            goal=self.goal,
            weekly_goal=self.weekly_goal,
        )


class RegistrationRequest(ProfileFields):
    """Sign-up payload."""

    email: str = Field(pattern=EMAIL_PATTERN, max_length=100)
    goal_type: GoalType

    def to_registration(self) -> Registration:
        """Convert to the domain model."""
        return Registration(
            email=self.email, details=self.to_details(), goal_type=self.goal_type
        )


class ProfileUpdateRequest(ProfileFields):
    """Profile edit payload; the goal type is derived from weight and goal."""


class ProfileResponse(BaseModel):
    """User profile with derived fields."""

    id: UUID
    name: str
    email: str
    dob: date
    sex: Sex
    weight: float
    height: float
    activity_level: ActivityLevel
    goal: float | None
    goal_type: GoalType
    weekly_goal: float
    bmi: float
    allowed_daily_intake: int

    @classmethod
    def from_domain(cls, user: UserProfile) -> "ProfileResponse":
        """Build from a UserProfile."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            dob=user.dob,
            sex=user.sex,
            weight=float(user.weight),
            height=float(user.height),
            activity_level=user.activity_level,
            goal=float(user.goal) if user.goal is not None else None,
            goal_type=user.goal_type,
            weekly_goal=float(user.weekly_goal),
            bmi=float(user.bmi),
            allowed_daily_intake=user.allowed_daily_intake,
        )


class FoodRequest(BaseModel):
    """Custom food payload."""

    name: str = Field(min_length=2, max_length=100)
    image: str | None = Field(default=None, max_length=255)
    meal_type: MealType
    calories: int = Field(ge=0, le=10000)

    def to_draft(self) -> FoodDraft:
        """Convert to the domain model."""
        return FoodDraft(
            name=self.name,
            meal_type=self.meal_type,
            calories=self.calories,
            image=self.image,
        )


class FoodResponse(BaseModel):
    """Food item as returned to clients."""

    id: UUID
    name: str
    image: str | None
    meal_type: MealType
    calories: int
    is_custom: bool

    @classmethod
    def from_domain(cls, food: Food) -> "FoodResponse":
        """Build from a Food."""
        return cls(
            id=food.id,
            name=food.name,
            image=food.image,
            meal_type=food.meal_type,
            calories=food.calories,
            is_custom=food.is_custom,
        )


class MealEntryRequest(BaseModel):
    """Meal logging payload."""

    food_id: UUID
    entry_date: date
    entry_time: time


class MealEntryResponse(BaseModel):
    """Logged meal with its food details."""

    id: UUID
    food_id: UUID
    food_name: str
    meal_type: MealType
    calories: int
    entry_date: date
    entry_time: time

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealEntryResponse":
        """Build from a MealEntry."""
        return cls(
            id=entry.id,
            food_id=entry.food.id,
            food_name=entry.food.name,
            meal_type=entry.food.meal_type,
            calories=entry.food.calories,
            entry_date=entry.entry_date,
            entry_time=entry.entry_time,
        )


class WeightEntryRequest(BaseModel):
    """Weight logging payload."""

    entry_date: date
    weight: Decimal = Field(ge=20, le=500)


class WeightEntryResponse(BaseModel):
    """Weight entry as returned to clients."""

    id: UUID
    entry_date: date
    weight: float

    @classmethod
    def from_domain(cls, entry: WeightEntry) -> "WeightEntryResponse":
        """Build from a WeightEntry."""
        return cls(id=entry.id, entry_date=entry.entry_date, weight=float(entry.weight))


class DashboardResponse(BaseModel):
    """Daily dashboard."""

    date: date
    allowed_daily_intake: int
    consumed_calories: int
    remaining_calories: int
    user_name: str
    goal_type: GoalType
    current_weight: float
    goal_weight: float | None
    today_weight: float | None
    meals_by_type: dict[MealType, list[MealEntryResponse]]
    total_meals_count: int

    @classmethod
    def from_domain(cls, summary: DashboardSummary) -> "DashboardResponse":
        """Build from a DashboardSummary."""
        return cls(
            date=summary.day,
            allowed_daily_intake=summary.allowed_daily_intake,
            consumed_calories=summary.consumed_calories,
            remaining_calories=summary.remaining_calories,
            user_name=summary.user_name,
            goal_type=summary.goal_type,
            current_weight=float(summary.current_weight),
            goal_weight=(
                float(summary.goal_weight) if summary.goal_weight is not None else None
            ),
            today_weight=(
                float(summary.today_weight)
                if summary.today_weight is not None
                else None
            ),
            meals_by_type={
                meal_type: [MealEntryResponse.from_domain(entry) for entry in entries]
                for meal_type, entries in summary.meals_by_type.items()
            },
            total_meals_count=summary.total_meals_count,
        )


class CoachingResponse(BaseModel):
    """Generated plan or review text."""

    text: str | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, reply: CoachingReply) -> "CoachingResponse":
        """Build from a CoachingReply."""
        return cls(text=reply.text, created_at=reply.created_at)


class ChatTurn(BaseModel):
    """A previous message in an advice conversation."""

    role: str
    content: str

    def to_domain(self) -> ChatMessage:
        """Convert to the domain model."""
        return ChatMessage(role=self.role, content=self.content)


class AdviceChatRequest(BaseModel):
    """Advice chat payload."""

    message: str = Field(min_length=1, max_length=4000)
    history: list[ChatTurn] = Field(default_factory=list)


class AdviceChatResponse(BaseModel):
    """Advice chat reply."""

    message: str
    response: str
