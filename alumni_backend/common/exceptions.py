class AlumniServiceError(Exception):
    """Base exception for business rule violations raised by the service layer."""


class NotFoundError(AlumniServiceError):
    """Raised when a referenced record or user does not exist."""


class ForbiddenError(AlumniServiceError):
    """Raised when the acting user lacks the relation or role the operation needs."""


class ConflictError(AlumniServiceError):
    """Raised on duplicate active requests and invalid status transitions."""


class CapacityExceededError(AlumniServiceError):
    """Raised when a mentor or an event has no room left."""


class ValidationError(AlumniServiceError, ValueError):
    """Raised when a required field is missing or malformed."""


class UnavailableError(AlumniServiceError, RuntimeError):
    """Raised when a collaborator such as the record store cannot be reached."""
