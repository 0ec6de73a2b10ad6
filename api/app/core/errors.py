class CareersError(Exception):
    """Base error for the careers builder core."""


class ValidationError(CareersError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class AuthenticationError(CareersError):
    """Raised when a request carries no verifiable actor."""


class AuthorizationError(CareersError):
    """Raised when the actor's role or ownership does not permit the action."""


class ConflictError(CareersError):
    """Raised when a write collides with existing state, e.g. a taken slug."""


class NotFoundError(CareersError):
    """Raised when the requested company or job does not exist."""


class StorageError(CareersError):
    """Raised when the document store fails or is not configured."""
