"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date, timedelta

from supabase import create_client

from calorie_tracker.adapters.openai_text_client import OpenAITextClient
from calorie_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from calorie_tracker.adapters.supabase_generated_text_repository import (
    SupabaseGeneratedTextRepository,
)
from calorie_tracker.adapters.supabase_meal_entry_repository import (
    SupabaseMealEntryRepository,
)
from calorie_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from calorie_tracker.adapters.supabase_weight_entry_repository import (
    SupabaseWeightEntryRepository,
)
from calorie_tracker.config import Settings
from calorie_tracker.services.coaching import CoachingService
from calorie_tracker.services.dashboard import DailySummaryAggregator
from calorie_tracker.services.foods import FoodService
from calorie_tracker.services.clock import utc_today
from calorie_tracker.services.meals import MealEntryService
from calorie_tracker.services.users import UserService
from calorie_tracker.services.weights import WeightLedger


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    food_service: FoodService
    meal_service: MealEntryService
    weight_ledger: WeightLedger
    dashboard: DailySummaryAggregator
    coaching_service: CoachingService
    close_resources: Callable[[], Awaitable[None]]
    today: Callable[[], date]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_service = UserService(
        SupabaseUserRepository(supabase_client), today=utc_today
    )
    food_service = FoodService(SupabaseFoodRepository(supabase_client))
    meal_service = MealEntryService(
        repository=SupabaseMealEntryRepository(supabase_client),
        food_service=food_service,
    )
    weight_ledger = WeightLedger(
        repository=SupabaseWeightEntryRepository(supabase_client),
        user_service=user_service,
    )
    dashboard = DailySummaryAggregator(
        user_service=user_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
    )
    text_client = OpenAITextClient.create(
        resolved_settings.openai_api_key,
        timeout=resolved_settings.openai_timeout_seconds,
    )
    coaching_service = CoachingService(
        client=text_client,
        repository=SupabaseGeneratedTextRepository(supabase_client),
        user_service=user_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
        model=resolved_settings.openai_model,
        store=resolved_settings.openai_store,
        max_age=timedelta(days=resolved_settings.ai_content_max_age_days),
    )

    async def close_resources() -> None:
        await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        food_service=food_service,
        meal_service=meal_service,
        weight_ledger=weight_ledger,
        dashboard=dashboard,
        coaching_service=coaching_service,
        close_resources=close_resources,
        today=utc_today,
    )
