"""AI coaching: meal plans, progress reviews and advice chat."""

import calendar
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.coaching import (
    ChatMessage,
    CoachingReply,
    ContentKind,
    GeneratedText,
)
from calorie_tracker.domain.errors import ExternalServiceError
from calorie_tracker.domain.meals import MealEntry
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.domain.weights import WeightEntry
from calorie_tracker.services import calculator
from calorie_tracker.services.clock import utc_now
from calorie_tracker.services.meals import MealEntryService, total_calories
from calorie_tracker.services.users import UserService
from calorie_tracker.services.weights import WeightLedger

logger = logging.getLogger(__name__)

MAX_HISTORY_CHARS = 8000
MEAL_HISTORY_DAYS = 7

PLAN_FALLBACK = (
    "I apologize, but I'm unable to generate your meal plan at the moment. "
    "Please try again later."
)
REVIEW_FALLBACK = (
    "I apologize, but I'm unable to generate your review at the moment. "
    "Please try again later."
)
CHAT_FALLBACK = (
    "I apologize, but I'm unable to process your request at the moment. "
    "Please try again later."
)

_PROFILE_TEMPLATE = """User Profile:
- Name: {name}
- Age: {age} years old
- Sex: {sex}
- Height: {height:.1f} cm
- Weight: {weight:.1f} kg
- BMI: {bmi:.1f}
- Activity Level: {activity}
- Goal: {goal}
- Pace: {pace:.2f} kg/week
- Daily Calorie Allowance: {allowance} cal"""

_PLAN_PROMPT = """You are a professional nutritionist and meal planner. \
Your task is to create a personalized meal plan for the user for next week.

{profile}

{meals}
{weights}

Based on this information, create a detailed 7-day meal plan that:
1. Stays within the daily calorie allowance
2. Includes breakfast, lunch and dinner
3. Is balanced with proteins, carbs, and healthy fats
4. Considers the user's goal (weight loss/gain/maintenance)
5. Is practical and uses common ingredients

Format the plan clearly with each day and meal listed.
Trim all superfluous text, reply should contain only a bulleted list. \
Do not use markdown, reply in plain text."""

_REVIEW_PROMPT = """You are a professional nutritionist reviewing a user's progress. \
Your task is to provide a comprehensive review of their meal plan adherence \
and overall progress.

{profile}

{plan}
{meals}
{weights}

Based on this information, provide a detailed review that:
1. Evaluates how well the user followed their meal plan
2. Analyzes their calorie intake patterns
3. Reviews their weight progress toward their goal
4. Identifies strengths and areas for improvement
5. Provides specific, actionable recommendations

Be encouraging but honest. Focus on progress and practical advice.
Trim all superfluous text, reply with only a bulleted list. \
Do not use markdown, reply in plain text."""

_CHAT_INSTRUCTIONS = """You are a professional diet advisor and nutritionist. \
Your role is to:
- Provide helpful, accurate, and personalized diet advice
- Answer questions about nutrition, calories, and healthy eating habits
- Suggest meal plans and food alternatives when asked
- Help users understand their dietary needs based on their goals
- Keep responses concise but informative

Use the user's information when making recommendations.
{profile}

Do not use markdown. Reply in plain text.
{meals}
{weights}"""


class TextGenerationClient(Protocol):
    """Interface for a prompt-in, text-out language model."""

    async def generate(
        self,
        *,
        model: str,
        instructions: str | None,
        messages: list[ChatMessage],
        store: bool,
    ) -> str:
        """Return the model's reply text."""


class GeneratedTextRepository(Protocol):
    """Persistence interface for stored plans and reviews."""

    def get_text(self, user_id: UUID, kind: ContentKind) -> GeneratedText | None:
        """Return stored text for a user, if any."""

    def save_text(
        self, user_id: UUID, kind: ContentKind, text: str, created_at: datetime
    ) -> GeneratedText:
        """Create or overwrite the stored text."""

    def delete_text(self, user_id: UUID, kind: ContentKind) -> None:
        """Delete stored text, if any."""


@dataclass
class CoachingService:
    """Builds prompts from tracking data and stores generated text."""

    client: TextGenerationClient
    repository: GeneratedTextRepository
    user_service: UserService
    meal_service: MealEntryService
    weight_ledger: WeightLedger
    model: str
    store: bool = False
    max_age: timedelta = timedelta(days=7)
    now: Callable[[], datetime] = field(default=utc_now)

    async def generate_plan(self, user_id: UUID) -> CoachingReply:
        """Generate and store a fresh 7-day meal plan."""
        user = self.user_service.get_profile(user_id)
        today = self.now().date()
        prompt = _PLAN_PROMPT.format(
            profile=_profile_section(user, today),
            meals=_meal_history_section(self._recent_meals(user_id, today)),
            weights=_weight_history_section(self._recent_weights(user_id, today)),
        )
        return await self._generate(user_id, ContentKind.PLAN, prompt, PLAN_FALLBACK)

    async def generate_review(self, user_id: UUID) -> CoachingReply:
        """Generate and store a progress review against the current plan."""
        user = self.user_service.get_profile(user_id)
        today = self.now().date()
        plan = self.repository.get_text(user_id, ContentKind.PLAN)
        prompt = _REVIEW_PROMPT.format(
            profile=_profile_section(user, today),
            plan=(
                f"Current Meal Plan:\n{plan.text}"
                if plan
                else "Current Meal Plan: No meal plan generated yet."
            ),
            meals=_meal_history_section(self._recent_meals(user_id, today)),
            weights=_weight_history_section(self._recent_weights(user_id, today)),
        )
        return await self._generate(
            user_id, ContentKind.REVIEW, prompt, REVIEW_FALLBACK
        )

    def get_plan(self, user_id: UUID) -> CoachingReply:
        """Return the stored plan, or an empty reply."""
        return _to_reply(self.repository.get_text(user_id, ContentKind.PLAN))

    def get_review(self, user_id: UUID) -> CoachingReply:
        """Return the stored review, or an empty reply."""
        return _to_reply(self.repository.get_text(user_id, ContentKind.REVIEW))

    def delete_review(self, user_id: UUID) -> None:
        """Remove the stored review."""
        self.repository.delete_text(user_id, ContentKind.REVIEW)

    async def ensure_fresh_plan(self, user_id: UUID) -> CoachingReply:
        """Return the stored plan, regenerating it when missing or stale."""
        stored = self.repository.get_text(user_id, ContentKind.PLAN)
        if self.is_stale(stored):
            return await self.generate_plan(user_id)
        return _to_reply(stored)

    async def ensure_fresh_review(self, user_id: UUID) -> CoachingReply:
        """Return the stored review, regenerating it when missing or stale."""
        stored = self.repository.get_text(user_id, ContentKind.REVIEW)
        if self.is_stale(stored):
            return await self.generate_review(user_id)
        return _to_reply(stored)

    def is_stale(self, stored: GeneratedText | None) -> bool:
        """Return True when text is absent or older than the max age."""
        if stored is None:
            return True
        return self.now() - stored.created_at > self.max_age

    async def chat(
        self, user_id: UUID, message: str, history: list[ChatMessage] | None = None
    ) -> str:
        """Answer a diet question with the user's profile as context."""
        user = self.user_service.get_profile(user_id)
        today = self.now().date()
        instructions = _CHAT_INSTRUCTIONS.format(
            profile=_profile_section(user, today),
            meals=_meal_history_section(self._recent_meals(user_id, today)),
            weights=_weight_history_section(self._recent_weights(user_id, today)),
        )
        messages = [
            *truncate_history(history or []),
            ChatMessage(role="user", content=message),
        ]
        try:
            return await self.client.generate(
                model=self.model,
                instructions=instructions,
                messages=messages,
                store=self.store,
            )
        except ExternalServiceError:
            logger.exception("Advice chat failed for user %s", user_id)
            return CHAT_FALLBACK

    async def _generate(
        self, user_id: UUID, kind: ContentKind, prompt: str, fallback: str
    ) -> CoachingReply:
        logger.info("Generating %s for user %s", kind.value.lower(), user_id)
        try:
            text = await self.client.generate(
                model=self.model,
                instructions=None,
                messages=[ChatMessage(role="user", content=prompt)],
                store=self.store,
            )
        except ExternalServiceError:
            logger.exception("Failed to generate %s for user %s", kind.value, user_id)
            return CoachingReply(text=fallback)
        saved = self.repository.save_text(user_id, kind, text, self.now())
        return _to_reply(saved)

    def _recent_meals(self, user_id: UUID, today: date) -> list[MealEntry]:
        start = today - timedelta(days=MEAL_HISTORY_DAYS)
        return self.meal_service.list_for_range(user_id, start, today)

    def _recent_weights(self, user_id: UUID, today: date) -> list[WeightEntry]:
        return self.weight_ledger.range(user_id, _one_month_before(today), today)


def truncate_history(
    history: list[ChatMessage], max_chars: int = MAX_HISTORY_CHARS
) -> list[ChatMessage]:
    """Keep the most recent messages whose combined length fits max_chars."""
    kept: list[ChatMessage] = []
    total = 0
    for message in reversed(history):
        total += len(message.content)
        if total > max_chars:
            break
        kept.append(message)
    kept.reverse()
    return kept


def _to_reply(stored: GeneratedText | None) -> CoachingReply:
    if stored is None:
        return CoachingReply(text=None)
    return CoachingReply(text=stored.text, created_at=stored.created_at)


def _profile_section(user: UserProfile, today: date) -> str:
    return _PROFILE_TEMPLATE.format(
        name=user.name,
        age=calculator.age_on(user.dob, today),
        sex=user.sex.value,
        height=user.height,
        weight=user.weight,
        bmi=user.bmi,
        activity=user.activity_level.value.replace("_", " "),
        goal=user.goal_type.value,
        pace=user.weekly_goal,
        allowance=user.allowed_daily_intake,
    )


def _meal_history_section(entries: list[MealEntry]) -> str:
    if not entries:
        return "Meal History (Last 7 Days): No meals logged."
    by_day: dict[date, list[MealEntry]] = {}
    for entry in entries:
        by_day.setdefault(entry.entry_date, []).append(entry)

    lines = ["Meal History (Last 7 Days):"]
    for day in sorted(by_day, reverse=True):
        meals = sorted(by_day[day], key=lambda entry: entry.entry_time)
        lines.append("")
        lines.append(f"{day:%a, %b} {day.day} (Total: {total_calories(meals)} cal):")
        for meal in meals:
            lines.append(
                f"  - {meal.entry_time:%I:%M %p}: {meal.food.name} "
                f"({meal.food.calories} cal)"
            )
    return "\n".join(lines) + "\n"


def _weight_history_section(entries: list[WeightEntry]) -> str:
    if not entries:
        return "Weight History (Last Month): No weight entries logged."
    lines = ["Weight History (Last Month):"]
    for entry in entries:
        day = entry.entry_date
        lines.append(f"  - {day:%b} {day.day}: {entry.weight:.1f} kg")
    if len(entries) >= 2:  # noqa: PLR2004
        change = entries[-1].weight - entries[0].weight
        if change > 0:
            trend = "gained"
        elif change < 0:
            trend = "lost"
        else:
            trend = "maintained"
        lines.append(f"  Overall: {trend} {abs(change):.1f} kg")
    return "\n".join(lines) + "\n"


def _one_month_before(day: date) -> date:
    year, month = (day.year, day.month - 1) if day.month > 1 else (day.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last_day))
