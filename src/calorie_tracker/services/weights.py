"""Weight ledger: one entry per user per day."""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from calorie_tracker.domain.errors import ConflictError, NotFoundError
from calorie_tracker.domain.weights import WeightEntry
from calorie_tracker.services.users import UserService

logger = logging.getLogger(__name__)


class WeightEntryRepository(Protocol):
    """Persistence interface for weight entries.

    Implementations must enforce uniqueness on ``(user_id, entry_date)``.
    """

    def upsert_entry(
        self, user_id: UUID, entry_date: date, weight: Decimal
    ) -> WeightEntry:
        """Insert or update the entry for the date in a single statement."""

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        """Return an entry by id, if present."""

    def get_by_date(self, user_id: UUID, entry_date: date) -> WeightEntry | None:
        """Return the user's entry for a date, if present."""

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the entry with the greatest date."""

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[WeightEntry]:
        """Return entries within an inclusive range, ascending by date."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""


@dataclass
class WeightLedger:
    """Service for weight entries and the profile's current weight."""

    repository: WeightEntryRepository
    user_service: UserService

    def upsert(self, user_id: UUID, entry_date: date, weight: Decimal) -> WeightEntry:
        """Record the weight for a date, replacing any existing value.

        When the date is the user's latest, the profile weight, BMI and
        allowance are refreshed. Earlier dates leave the profile untouched.
        """
        self.user_service.get_profile(user_id)
        try:
            entry = self.repository.upsert_entry(user_id, entry_date, weight)
        except ConflictError:
            logger.warning(
                "Weight entry conflict for user %s on %s, retrying",
                user_id,
                entry_date,
            )
            entry = self.repository.upsert_entry(user_id, entry_date, weight)

        latest = self.repository.get_latest(user_id)
        if latest is not None and entry.entry_date >= latest.entry_date:
            self.user_service.apply_weight(user_id, entry.weight)
        return entry

    def delete(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user.

        The profile keeps its cached weight even if the latest entry is removed.
        """
        entry = self.get(user_id, entry_id)
        self.repository.delete_entry(entry.id)

    def get(self, user_id: UUID, entry_id: UUID) -> WeightEntry:
        """Return an entry owned by the user."""
        entry = self.repository.get_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise NotFoundError(f"Weight entry not found with id: {entry_id}")
        return entry

    def get_by_date(self, user_id: UUID, entry_date: date) -> WeightEntry:
        """Return the entry for a date."""
        entry = self.find_by_date(user_id, entry_date)
        if entry is None:
            raise NotFoundError(f"Weight entry not found for date: {entry_date}")
        return entry

    def find_by_date(self, user_id: UUID, entry_date: date) -> WeightEntry | None:
        """Return the entry for a date, if any."""
        return self.repository.get_by_date(user_id, entry_date)

    def latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the most recent entry, if any."""
        return self.repository.get_latest(user_id)

    def range(self, user_id: UUID, start: date, end: date) -> list[WeightEntry]:
        """Return entries between two dates inclusive, oldest first."""
        return self.repository.list_entries(user_id, start, end)

    def history(self, user_id: UUID) -> list[WeightEntry]:
        """Return all entries, oldest first."""
        return self.repository.list_entries(user_id)
