from abc import ABC


class UserError(ABC, Exception):
    """Base class for caller errors.

    All errors that inherit from UserError will have their messages
    displayed to the caller. These errors are never retried and should
    not contain any sensitive information.
    """


class NotFoundError(UserError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str = "Counter not found") -> None:
        super().__init__(message)


class AuthenticationError(UserError):
    """Raised when authentication fails."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class ValidationError(UserError):
    """Raised when caller input fails validation."""


class InvalidDocumentTypeError(UserError):
    """Raised when a document type is not one of the recognized values."""


class TransientError(Exception):
    """Base class for infrastructure failures the caller may retry."""


class ConflictError(TransientError):
    """Raised when concurrent writers collide on the same counter.

    The allocator retries these with backoff. Once its attempts are
    exhausted the error reaches the caller, who should retry the whole
    allocation.
    """


class StoreUnavailableError(TransientError):
    """Raised when the counter store cannot be reached or does not answer in time."""
