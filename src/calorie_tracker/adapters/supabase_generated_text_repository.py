"""Supabase repository for generated plans and reviews."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.coaching import ContentKind, GeneratedText
from calorie_tracker.services.coaching import GeneratedTextRepository

_TABLES = {ContentKind.PLAN: "plans", ContentKind.REVIEW: "reviews"}


@dataclass
class SupabaseGeneratedTextRepository(GeneratedTextRepository):
    """Stores one plan and one review per user."""

    client: Client

    def get_text(self, user_id: UUID, kind: ContentKind) -> GeneratedText | None:
        """Return the stored text for a user."""
        response = (
            self.client.table(_TABLES[kind])
            .select("user_id, text, created_at")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0], kind)

    def save_text(
        self, user_id: UUID, kind: ContentKind, text: str, created_at: datetime
    ) -> GeneratedText:
        """Overwrite the user's stored text in place."""
        response = (
            self.client.table(_TABLES[kind])
            .upsert(
                {
                    "user_id": str(user_id),
                    "text": text,
                    "created_at": created_at.isoformat(),
                },
                on_conflict="user_id",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to save {kind.value.lower()}")
        return _parse_row(response.data[0], kind)

    def delete_text(self, user_id: UUID, kind: ContentKind) -> None:
        """Delete the user's stored text."""
        self.client.table(_TABLES[kind]).delete().eq("user_id", str(user_id)).execute()


def _parse_row(row: dict[str, object], kind: ContentKind) -> GeneratedText:
    return GeneratedText(
        user_id=UUID(str(row["user_id"])),
        kind=kind,
        text=str(row.get("text", "")),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
