class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a second check-in or check-out is attempted for the same day."""


class StateError(DomainError):
    """Raised when an operation is attempted out of order."""


class DayOnLeaveError(StateError):
    """Raised when check-in/out is attempted on a day marked as leave."""


class InvalidRangeError(DomainError):
    """Raised for an inverted or malformed date range."""


class AuthorizationError(DomainError):
    """Raised when an actor lacks HR scope or asks for employees outside it."""


class StoreUnavailableError(DomainError):
    """Raised when the record store cannot be reached (connectivity, timeout)."""


class DuplicateCheckOutError(ConflictError, StateError):
    """Raised when a day already has a check-out.

    Both a conflict (one check-out per day) and an ordering violation, so
    callers handling either class see it.
    """
