"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.models import (
    ActivityLevel,
    GoalType,
    Registration,
    Sex,
    UserProfile,
)
from calorie_tracker.domain.nutrition import NutritionProfile
from calorie_tracker.services.clock import utc_now
from calorie_tracker.services.users import UserRepository

_COLUMNS = (
    "id, name, email, dob, sex, weight, height, activity_level, goal, goal_type, "
    "weekly_goal, bmi, allowed_daily_intake, created_at, updated_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_by_id(self, user_id: UUID) -> UserProfile | None:
        """Return the user profile, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_user(response.data[0])
        return None

    def email_exists(self, email: str) -> bool:
        """Return True when the email is already registered."""
        response = (
            self.client.table("users").select("id").eq("email", email).limit(1).execute()
        )
        return bool(response.data)

    def create_user(
        self, registration: Registration, derived: NutritionProfile
    ) -> UserProfile:
        """Insert a new user row and return it."""
        details = registration.details
        response = (
            self.client.table("users")
            .insert(
                {
                    "email": registration.email,
                    "name": details.name,
                    "dob": details.dob.isoformat(),
                    "sex": details.sex.value,
                    "weight": str(details.weight),
                    "height": str(details.height),
                    "activity_level": details.activity_level.value,
                    "goal": str(details.goal) if details.goal is not None else None,
                    "goal_type": registration.goal_type.value,
                    "weekly_goal": str(details.weekly_goal),
                    "bmi": str(derived.bmi),
                    "allowed_daily_intake": derived.allowance,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_user(response.data[0])

    def save_profile(self, profile: UserProfile) -> UserProfile:
        """Update mutable profile columns and return the stored row."""
        response = (
            self.client.table("users")
            .update(
                {
                    "name": profile.name,
                    "dob": profile.dob.isoformat(),
                    "sex": profile.sex.value,
                    "weight": str(profile.weight),
                    "height": str(profile.height),
                    "activity_level": profile.activity_level.value,
                    "goal": str(profile.goal) if profile.goal is not None else None,
                    "goal_type": profile.goal_type.value,
                    "weekly_goal": str(profile.weekly_goal),
                    "bmi": str(profile.bmi),
                    "allowed_daily_intake": profile.allowed_daily_intake,
                    "updated_at": utc_now().isoformat(),
                }
            )
            .eq("id", str(profile.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_user(response.data[0])

    def save_weight(
        self, user_id: UUID, weight: Decimal, derived: NutritionProfile
    ) -> UserProfile:
        """Update the weight and derived columns only."""
        response = (
            self.client.table("users")
            .update(
                {
                    "weight": str(weight),
                    "bmi": str(derived.bmi),
                    "allowed_daily_intake": derived.allowance,
                    "updated_at": utc_now().isoformat(),
                }
            )
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user weight in Supabase")
        return _parse_user(response.data[0])


def _parse_user(row: dict[str, object]) -> UserProfile:
    goal = row.get("goal")
    return UserProfile(
        id=UUID(str(row["id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        dob=date.fromisoformat(str(row["dob"])),
        sex=Sex(row["sex"]),
        weight=Decimal(str(row["weight"])),
        height=Decimal(str(row["height"])),
        activity_level=ActivityLevel(row["activity_level"]),
        goal=Decimal(str(goal)) if goal is not None else None,
        goal_type=GoalType(row["goal_type"]),
        weekly_goal=Decimal(str(row["weekly_goal"])),
        bmi=Decimal(str(row["bmi"])),
        allowed_daily_intake=int(row["allowed_daily_intake"]),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
