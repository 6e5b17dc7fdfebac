"""Domain error taxonomy."""


class TrackerError(Exception):
    """Base class for errors surfaced to API callers."""


class NotFoundError(TrackerError):
    """A referenced record is missing or belongs to another user."""


class InvalidInputError(TrackerError):
    """Input that the domain cannot accept."""


class ConflictError(TrackerError):
    """A concurrent write collided with a uniqueness constraint."""


class ExternalServiceError(TrackerError):
    """A remote collaborator such as the text model failed."""
