"""User profile lifecycle and derived-field maintenance."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import InvalidInputError, NotFoundError
from calorie_tracker.domain.models import (
    GoalType,
    ProfileDetails,
    Registration,
    UserProfile,
)
from calorie_tracker.domain.nutrition import NutritionProfile, ProfileInputs
from calorie_tracker.services import calculator
from calorie_tracker.services.clock import utc_today

logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_by_id(self, user_id: UUID) -> UserProfile | None:
        """Return the user profile, if present."""

    def email_exists(self, email: str) -> bool:
        """Return True when an account already uses the email."""

    def create_user(
        self, registration: Registration, derived: NutritionProfile
    ) -> UserProfile:
        """Create and return a new user profile."""

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Persist all mutable profile fields and return the stored row."""

    def save_weight(
        self, user_id: UUID, weight: Decimal, derived: NutritionProfile
    ) -> UserProfile:
        """Persist only the weight and its derived fields."""


@dataclass
class UserService:
    """Application service for user profiles.

    Every mutator recomputes ``bmi`` and ``allowed_daily_intake`` before
    persisting, so the cached fields always match the current biometrics.
    """

    repository: UserRepository
    today: Callable[[], date] = field(default=utc_today)

    def register(self, registration: Registration) -> UserProfile:
        """Create a user with derived fields computed once."""
        if self.repository.email_exists(registration.email):
            raise InvalidInputError("Email already registered")
        derived = self._derive(registration.details, registration.goal_type)
        user = self.repository.create_user(registration, derived)
        logger.info("Registered user %s", user.id)
        return user

    def get_profile(self, user_id: UUID) -> UserProfile:
        """Return the profile or raise NotFoundError."""
        user = self.repository.get_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User not found with id: {user_id}")
        return user

    def update_profile(self, user_id: UUID, details: ProfileDetails) -> UserProfile:
        """Replace editable fields, deriving the goal type from weight and goal."""
        current = self.get_profile(user_id)
        goal_type = calculator.derive_goal_type(details.weight, details.goal)
        derived = self._derive(details, goal_type)
        updated = replace(
            current,
            name=details.name,
            dob=details.dob,
            sex=details.sex,
            weight=details.weight,
            height=details.height,
            activity_level=details.activity_level,
            goal=details.goal,
            goal_type=goal_type,
            weekly_goal=details.weekly_goal,
            bmi=derived.bmi,
            allowed_daily_intake=derived.allowance,
        )
        return self.repository.save_profile(updated)

    def apply_weight(self, user_id: UUID, weight: Decimal) -> UserProfile:
        """Set the current weight and refresh the derived fields.

        Only the weight columns are written, so a concurrent profile edit to
        other fields is kept.
        """
        current = self.get_profile(user_id)
        derived = self._derive(
            replace(_details_of(current), weight=weight), current.goal_type
        )
        logger.info(
            "Recalculated profile for user %s: bmi=%s allowance=%s",
            user_id,
            derived.bmi,
            derived.allowance,
        )
        return self.repository.save_weight(user_id, weight, derived)

    def _derive(self, details: ProfileDetails, goal_type: GoalType) -> NutritionProfile:
        return calculator.compute_all(
            ProfileInputs(
                weight=details.weight,
                height=details.height,
                age=calculator.age_on(details.dob, self.today()),
                sex=details.sex,
                activity_level=details.activity_level,
                weekly_goal=details.weekly_goal,
                goal_type=goal_type,
            )
        )


def _details_of(profile: UserProfile) -> ProfileDetails:
    return ProfileDetails(
        name=profile.name,
        dob=profile.dob,
        sex=profile.sex,
        weight=profile.weight,
        height=profile.height,
        activity_level=profile.activity_level,
        goal=profile.goal,
        weekly_goal=profile.weekly_goal,
    )
