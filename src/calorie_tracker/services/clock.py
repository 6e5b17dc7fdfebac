"""Wall clock shared by services and routes; calendar days are UTC."""

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


def utc_today() -> date:
    """Return the current calendar day in UTC."""
    return utc_now().date()
