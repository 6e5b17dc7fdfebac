"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime, time
from decimal import Decimal
from uuid import UUID, uuid4

import pytest

from calorie_tracker.config import Settings
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.coaching import ChatMessage, ContentKind, GeneratedText
from calorie_tracker.domain.errors import ConflictError, ExternalServiceError
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
from calorie_tracker.domain.nutrition import NutritionProfile
from calorie_tracker.domain.weights import WeightEntry
from calorie_tracker.services.coaching import (
    CoachingService,
    GeneratedTextRepository,
    TextGenerationClient,
)
from calorie_tracker.services.dashboard import DailySummaryAggregator
from calorie_tracker.services.foods import FoodRepository, FoodService
from calorie_tracker.services.meals import MealEntryRepository, MealEntryService
from calorie_tracker.services.users import UserRepository, UserService
from calorie_tracker.services.weights import WeightEntryRepository, WeightLedger

TODAY = date(2026, 10, 18)
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=UTC)


def make_details(**overrides: object) -> ProfileDetails:
    """Profile of a 34 year old moderately active man losing 0.5 kg/week."""
    values: dict[str, object] = {
        "name": "Alex Doe",
        "dob": date(1992, 5, 1),
        "sex": Sex.MALE,
        "weight": Decimal("75.5"),
        "height": Decimal("175"),
        "activity_level": ActivityLevel.MODERATELY_ACTIVE,
        "goal": Decimal("70"),
        "weekly_goal": Decimal("0.5"),
    }
    values.update(overrides)
    return ProfileDetails(**values)  # type: ignore[arg-type]


def make_registration(
    email: str = "alex@example.com",
    goal_type: GoalType = GoalType.LOSE,
    **overrides: object,
) -> Registration:
    return Registration(
        email=email, details=make_details(**overrides), goal_type=goal_type
    )


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserProfile] = field(default_factory=dict)
    saves: int = 0
    weight_saves: int = 0

    def get_by_id(self, user_id: UUID) -> UserProfile | None:
        return self.users.get(user_id)

    def email_exists(self, email: str) -> bool:
        return any(user.email == email for user in self.users.values())

    def create_user(
        self, registration: Registration, derived: NutritionProfile
    ) -> UserProfile:
        details = registration.details
        user = UserProfile(
            id=uuid4(),
            name=details.name,
            email=registration.email,
            dob=details.dob,
            sex=details.sex,
            weight=details.weight,
            height=details.height,
            activity_level=details.activity_level,
            goal=details.goal,
            goal_type=registration.goal_type,
            weekly_goal=details.weekly_goal,
            bmi=derived.bmi,
            allowed_daily_intake=derived.allowance,
            created_at=NOW,
            updated_at=NOW,
        )
        self.users[user.id] = user
        return user

    def save_profile(self, profile: UserProfile) -> UserProfile:
        self.saves += 1
        self.users[profile.id] = profile
        return profile

    def save_weight(
        self, user_id: UUID, weight: Decimal, derived: NutritionProfile
    ) -> UserProfile:
        self.weight_saves += 1
        profile = replace(
            self.users[user_id],
            weight=weight,
            bmi=derived.bmi,
            allowed_daily_intake=derived.allowance,
        )
        self.users[user_id] = profile
        return profile


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[UUID, Food] = field(default_factory=dict)

    def add_system_food(self, name: str, meal_type: MealType, calories: int) -> Food:
        food = Food(id=uuid4(), name=name, meal_type=meal_type, calories=calories)
        self.foods[food.id] = food
        return food

    def get_food(self, food_id: UUID) -> Food | None:
        return self.foods.get(food_id)

    def list_available(
        self, user_id: UUID, meal_type: MealType | None = None
    ) -> list[Food]:
        return [
            food
            for food in self.foods.values()
            if food.visible_to(user_id)
            and (meal_type is None or food.meal_type == meal_type)
        ]

    def list_custom(self, user_id: UUID) -> list[Food]:
        return [food for food in self.foods.values() if food.user_id == user_id]

    def create_food(self, user_id: UUID, draft: FoodDraft) -> Food:
        food = Food(
            id=uuid4(),
            name=draft.name,
            meal_type=draft.meal_type,
            calories=draft.calories,
            user_id=user_id,
            image=draft.image,
        )
        self.foods[food.id] = food
        return food

    def update_food(self, food_id: UUID, draft: FoodDraft) -> Food:
        food = replace(
            self.foods[food_id],
            name=draft.name,
            meal_type=draft.meal_type,
            calories=draft.calories,
            image=draft.image,
        )
        self.foods[food_id] = food
        return food

    def delete_food(self, food_id: UUID) -> None:
        self.foods.pop(food_id, None)


@dataclass
class InMemoryMealEntryRepository(MealEntryRepository):
    """In-memory meal entry repository that resolves foods on read."""

    food_repository: InMemoryFoodRepository
    rows: dict[UUID, dict[str, object]] = field(default_factory=dict)

    def create_entry(
        self, user_id: UUID, food_id: UUID, entry_date: date, entry_time: time
    ) -> MealEntry:
        entry_id = uuid4()
        self.rows[entry_id] = {
            "user_id": user_id,
            "food_id": food_id,
            "entry_date": entry_date,
            "entry_time": entry_time,
        }
        return self._build(entry_id)

    def get_entry(self, entry_id: UUID) -> MealEntry | None:
        if entry_id not in self.rows:
            return None
        return self._build(entry_id)

    def list_entries(self, user_id: UUID, start: date, end: date) -> list[MealEntry]:
        entries = [
            self._build(entry_id)
            for entry_id, row in self.rows.items()
            if row["user_id"] == user_id and start <= row["entry_date"] <= end
        ]
        return sorted(entries, key=lambda entry: (entry.entry_date, entry.entry_time))

    def delete_entry(self, entry_id: UUID) -> None:
        self.rows.pop(entry_id, None)

    def _build(self, entry_id: UUID) -> MealEntry:
        row = self.rows[entry_id]
        return MealEntry(
            id=entry_id,
            user_id=row["user_id"],
            food=self.food_repository.foods[row["food_id"]],
            entry_date=row["entry_date"],
            entry_time=row["entry_time"],
        )


@dataclass
class InMemoryWeightEntryRepository(WeightEntryRepository):
    """In-memory weight repository keyed by (user, date)."""

    entries: dict[tuple[UUID, date], WeightEntry] = field(default_factory=dict)
    conflicts_remaining: int = 0
    upsert_calls: int = 0

    def upsert_entry(
        self, user_id: UUID, entry_date: date, weight: Decimal
    ) -> WeightEntry:
        self.upsert_calls += 1
        if self.conflicts_remaining:
            self.conflicts_remaining -= 1
            raise ConflictError("simulated unique violation")
        key = (user_id, entry_date)
        existing = self.entries.get(key)
        if existing:
            entry = replace(existing, weight=weight)
        else:
            entry = WeightEntry(
                id=uuid4(),
                user_id=user_id,
                entry_date=entry_date,
                weight=weight,
                created_at=datetime.now(tz=UTC),
            )
        self.entries[key] = entry
        return entry

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        for entry in self.entries.values():
            if entry.id == entry_id:
                return entry
        return None

    def get_by_date(self, user_id: UUID, entry_date: date) -> WeightEntry | None:
        return self.entries.get((user_id, entry_date))

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        mine = self.list_entries(user_id)
        return mine[-1] if mine else None

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[WeightEntry]:
        mine = [
            entry
            for (owner, day), entry in self.entries.items()
            if owner == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(mine, key=lambda entry: entry.entry_date)

    def delete_entry(self, entry_id: UUID) -> None:
        for key, entry in list(self.entries.items()):
            if entry.id == entry_id:
                del self.entries[key]


@dataclass
class InMemoryGeneratedTextRepository(GeneratedTextRepository):
    """In-memory store for plans and reviews."""

    texts: dict[tuple[UUID, ContentKind], GeneratedText] = field(default_factory=dict)

    def get_text(self, user_id: UUID, kind: ContentKind) -> GeneratedText | None:
        return self.texts.get((user_id, kind))

    def save_text(
        self, user_id: UUID, kind: ContentKind, text: str, created_at: datetime
    ) -> GeneratedText:
        stored = GeneratedText(
            user_id=user_id, kind=kind, text=text, created_at=created_at
        )
        self.texts[(user_id, kind)] = stored
        return stored

    def delete_text(self, user_id: UUID, kind: ContentKind) -> None:
        self.texts.pop((user_id, kind), None)


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake text model that records requests."""

    reply: str = "- Monday: oatmeal"
    fail: bool = False
    calls: list[dict[str, object]] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        store: bool,
    ) -> str:
        self.calls.append(
            {"model": model, "instructions": instructions, "messages": messages}
        )
        if self.fail:
            raise ExternalServiceError("model unavailable")
        return self.reply


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def weight_repository() -> InMemoryWeightEntryRepository:
    return InMemoryWeightEntryRepository()


@pytest.fixture
def meal_repository(
    food_repository: InMemoryFoodRepository,
) -> InMemoryMealEntryRepository:
    return InMemoryMealEntryRepository(food_repository=food_repository)


@pytest.fixture
def text_repository() -> InMemoryGeneratedTextRepository:
    return InMemoryGeneratedTextRepository()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def user_service(user_repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository, today=lambda: TODAY)


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodService:
    return FoodService(food_repository)


@pytest.fixture
def meal_service(
    meal_repository: InMemoryMealEntryRepository, food_service: FoodService
) -> MealEntryService:
    return MealEntryService(repository=meal_repository, food_service=food_service)


@pytest.fixture
def weight_ledger(
    weight_repository: InMemoryWeightEntryRepository, user_service: UserService
) -> WeightLedger:
    return WeightLedger(repository=weight_repository, user_service=user_service)


@pytest.fixture
def dashboard(
    user_service: UserService,
    meal_service: MealEntryService,
    weight_ledger: WeightLedger,
) -> DailySummaryAggregator:
    return DailySummaryAggregator(
        user_service=user_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
    )


@pytest.fixture
def coaching_service(
    text_client: FakeTextClient,
    text_repository: InMemoryGeneratedTextRepository,
    user_service: UserService,
    meal_service: MealEntryService,
    weight_ledger: WeightLedger,
) -> CoachingService:
    return CoachingService(
        client=text_client,
        repository=text_repository,
        user_service=user_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
        model="test-model",
        now=lambda: NOW,
    )


@pytest.fixture
def user(user_service: UserService) -> UserProfile:
    return user_service.register(make_registration())


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    food_service: FoodService,
    meal_service: MealEntryService,
    weight_ledger: WeightLedger,
    dashboard: DailySummaryAggregator,
    coaching_service: CoachingService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        food_service=food_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
        dashboard=dashboard,
        coaching_service=coaching_service,
        close_resources=close_resources,
        today=lambda: TODAY,
    )
