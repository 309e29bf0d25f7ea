class DomainError(Exception):
    """Base exception for conditions surfaced to callers."""

    code = "UNKNOWN"


class InvalidArgumentError(DomainError):
    """Raised when caller input is malformed."""

    code = "INVALID_ARGUMENT"


class NotFoundError(DomainError):
    """Raised when no record matches a lookup or update target."""

    code = "NOT_FOUND"


class ResourceExhaustedError(DomainError):
    """Raised when the record identifier space is used up."""

    code = "RESOURCE_EXHAUSTED"


class InternalError(DomainError):
    """Raised when the underlying store fails or returns an unreadable document."""

    code = "INTERNAL"
