# src/taskchat/core/errors.py

"""
Service error taxonomy.

Every failure a caller can observe is a ServiceError subclass carrying an ErrorKind.
Upstream (LLM) failures are the exception: they are absorbed by the completion
client and only surface as Completion.error_kind.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    UPSTREAM = "upstream"
    INTERNAL = "internal"


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.INTERNAL
    default_message = "Internal error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class UnauthorizedError(ServiceError):
    kind = ErrorKind.UNAUTHORIZED
    default_message = "Unauthorized access"


class TaskNotFoundError(ServiceError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Task not found"

    def __init__(self, task_id: str) -> None:
        super().__init__()
        self.task_id = task_id


class InvalidRequestError(ServiceError):
    kind = ErrorKind.INVALID
    default_message = "Invalid request"


class ProcessingError(ServiceError):
    kind = ErrorKind.INTERNAL
    default_message = "Error processing message"


class PersistenceError(ServiceError):
    kind = ErrorKind.INTERNAL
    default_message = "Failed to restore persisted state"
