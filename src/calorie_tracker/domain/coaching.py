"""Models for AI-generated coaching content."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class ContentKind(StrEnum):
    """Kind of stored generated text."""

    PLAN = "PLAN"
    REVIEW = "REVIEW"


@dataclass(frozen=True)
class GeneratedText:
    """Generated text stored per user and kind."""

    user_id: UUID
    kind: ContentKind
    text: str
    created_at: datetime


@dataclass(frozen=True)
class ChatMessage:
    """A prior turn in an advice conversation."""

    role: str
    content: str


@dataclass(frozen=True)
class CoachingReply:
    """Text returned to the caller, with its timestamp when persisted."""

    text: str | None
    created_at: datetime | None = None
