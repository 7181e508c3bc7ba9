"""
Error types raised by the service and repository layers.

Every error carries a machine readable ``code`` and the structured context
that produced it. The HTTP layer maps them to status codes in
``deal_monitor.main``.
"""

from typing import Any, Optional


class DealMonitorError(Exception):
    """Base exception for all deal monitor errors."""

    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(DealMonitorError):
    """Input failed schema validation. ``field`` is the first offending field."""

    code = "validation_error"

    def __init__(self, field: Optional[str], message: str):
        self.field = field
        detail = f"{field}: {message}" if field else message
        super().__init__(f"Validation error: {detail}")


class InvalidIdError(DealMonitorError):
    """An entity id was missing or not a positive integer."""

    code = "invalid_id"

    def __init__(self, entity: str, value: Any):
        self.entity = entity
        self.value = value
        super().__init__(f"Invalid {entity} ID: {value!r}")


class InvalidInputError(DealMonitorError):
    """A non-schema argument (search text, limit, name) was unusable."""

    code = "invalid_input"

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class DuplicateError(DealMonitorError):
    """The normalized unique key is already taken."""

    code = "duplicate"

    def __init__(self, entity: str, field: str, value: Any):
        self.entity = entity
        self.field = field
        self.value = value
        super().__init__(f"{entity.capitalize()} '{value}' already exists")


class NotFoundError(DealMonitorError):
    """The referenced entity does not exist."""

    code = "not_found"

    def __init__(self, entity: str, value: Any, key: str = "id"):
        self.entity = entity
        self.key = key
        self.value = value
        if key == "id":
            message = f"{entity.capitalize()} with ID {value} not found"
        else:
            message = f"{entity.capitalize()} with {key} '{value}' not found"
        super().__init__(message)


class DeletionFailedError(DealMonitorError):
    """Delete affected no rows even though the entity was just loaded."""

    code = "deletion_failed"

    def __init__(self, entity: str, entity_id: int):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"Failed to delete {entity} {entity_id}")


class RepositoryError(DealMonitorError):
    """Storage failure, wrapped with the operation that was attempted."""

    code = "repository_error"

    def __init__(self, operation: str, error: Exception):
        self.operation = operation
        self.original = error
        super().__init__(f"Failed to {operation}: {error}")
