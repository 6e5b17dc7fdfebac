"""Supabase repository for weight entries."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from postgrest.exceptions import APIError
from supabase import Client

from calorie_tracker.domain.errors import ConflictError
from calorie_tracker.domain.weights import WeightEntry
from calorie_tracker.services.weights import WeightEntryRepository

_COLUMNS = "id, user_id, entry_date, weight, created_at"
UNIQUE_VIOLATION = "23505"


@dataclass
class SupabaseWeightEntryRepository(WeightEntryRepository):
    """Supabase implementation for weight entries.

    The table carries a unique constraint on ``(user_id, entry_date)``.
    """

    client: Client

    def upsert_entry(
        self, user_id: UUID, entry_date: date, weight: Decimal
    ) -> WeightEntry:
        """Insert or update the day's weight in one statement.

        ``created_at`` is not part of the payload, so an update keeps it.
        """
        try:
            response = (
                self.client.table("weight_entries")
                .upsert(
                    {
                        "user_id": str(user_id),
                        "entry_date": entry_date.isoformat(),
                        "weight": str(weight),
                    },
                    on_conflict="user_id,entry_date",
                )
                .execute()
            )
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise ConflictError(
                    f"Concurrent weight entry for {entry_date}"
                ) from exc
            raise
        if not response.data:
            raise RuntimeError("Failed to upsert weight entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: UUID) -> WeightEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_by_date(self, user_id: UUID, entry_date: date) -> WeightEntry | None:
        """Return the user's entry for a date."""
        response = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("entry_date", entry_date.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def get_latest(self, user_id: UUID) -> WeightEntry | None:
        """Return the entry with the greatest date."""
        response = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("entry_date", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[WeightEntry]:
        """Return entries in the inclusive range, oldest first."""
        query = (
            self.client.table("weight_entries")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("entry_date", start.isoformat())
        if end is not None:
            query = query.lte("entry_date", end.isoformat())
        response = query.order("entry_date", desc=False).execute()
        return [_parse_entry(row) for row in response.data or []]

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry row."""
        self.client.table("weight_entries").delete().eq("id", str(entry_id)).execute()


def _parse_entry(row: dict[str, object]) -> WeightEntry:
    created_at = row.get("created_at")
    return WeightEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        entry_date=date.fromisoformat(str(row["entry_date"])),
        weight=Decimal(str(row["weight"])),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )
