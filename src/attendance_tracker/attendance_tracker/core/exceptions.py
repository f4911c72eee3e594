class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class DuplicateCheckIn(ValidationError):
    """Raised when the user already has a record for today."""


class NoCheckInFound(ValidationError):
    """Raised on checkout without a check-in for today."""


class AlreadyCheckedOut(ValidationError):
    """Raised on a second checkout for the same day."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AccessDenied(DomainError):
    """Raised when a user lacks permission for an action."""
