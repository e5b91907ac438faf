"""Domain-level exceptions.

Every workflow failure is a subclass of DomainException so the CLI and the
REST layer can catch them uniformly and turn them into user-facing messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or a business rule was violated."""


class UnknownLineError(ValidationError):
    """A pick refers to a line that is not part of the order."""

    def __init__(self, line_id: str) -> None:
        super().__init__(f"Line '{line_id}' is not part of this order")
        self.line_id = line_id


class AlreadyCompletedError(DomainException):
    """The order is already Completed and can no longer change."""


class NotFoundError(DomainException):
    """A requested entity does not exist."""


class StorageError(DomainException):
    """The persistence layer is unavailable or rejected a write."""
