class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidWindowError(ValidationError):
    """Schedule times break the start/end/lunch ordering rules."""


class SequenceViolationError(ValidationError):
    """Requested punch is not a legal transition from the day's last punch."""


class PunchConflictError(SequenceViolationError):
    """Another punch for the same user and day was recorded concurrently."""

    http_status = 409


class DayAlreadyFinishedError(ValidationError):
    """A punch was requested after the day's OUT was recorded."""


class UnknownUserError(ValidationError):
    """A referenced user id does not exist."""


class DuplicateScheduleError(DomainError):
    """A schedule already exists for the user and date."""

    http_status = 409


class NotFoundError(DomainError):
    """Referenced record does not exist."""

    http_status = 404


class AuthenticationError(DomainError):
    """Raised when no authenticated user is attached to the request."""

    http_status = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    http_status = 403
