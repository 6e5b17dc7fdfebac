"""Domain models for weight tracking."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from uuid import UUID


@dataclass(frozen=True)
class WeightEntry:
    """One weight measurement per user per day."""

    id: UUID
    user_id: UUID
    entry_date: date
    weight: Decimal
    created_at: datetime | None = None
