class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RequiredParameterError(ValidationError):
    """Raised when a required request parameter is missing."""

    def __init__(self, name: str):
        super().__init__(f"A required parameter ({name}) was missing")
        self.name = name


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a record that must exist cannot be found."""


class CacheError(DomainError):
    """Raised when the staging cache backend fails."""
