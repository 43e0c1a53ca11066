"""Status codes and typed errors shared by the track entity and its pool.

Mutators report their outcome as a `StatusCode`; construction and queries
raise the matching `StatusCodeError` subclass instead.
"""

from __future__ import annotations

from enum import Enum


class StatusCode(Enum):
    """Outcome of a track operation."""

    SUCCESS = "success"
    INVALID_PARAMETER = "invalid parameter"
    ALREADY_INITIALIZED = "already initialized"
    ALREADY_PRESENT = "already present"
    NOT_FOUND = "not found"
    NOT_INITIALIZED = "not initialized"

    @property
    def is_success(self) -> bool:
        return self is StatusCode.SUCCESS


class StatusCodeError(Exception):
    """Base class for errors carrying a `StatusCode`."""

    status_code = StatusCode.SUCCESS

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.status_code.value)


class InvalidParameterError(StatusCodeError, ValueError):
    status_code = StatusCode.INVALID_PARAMETER


class AlreadyInitializedError(StatusCodeError):
    status_code = StatusCode.ALREADY_INITIALIZED


class AlreadyPresentError(StatusCodeError):
    status_code = StatusCode.ALREADY_PRESENT


class NotFoundError(StatusCodeError, LookupError):
    status_code = StatusCode.NOT_FOUND


class NotInitializedError(StatusCodeError, LookupError):
    status_code = StatusCode.NOT_INITIALIZED


_ERRORS: dict[StatusCode, type[StatusCodeError]] = {
    StatusCode.INVALID_PARAMETER: InvalidParameterError,
    StatusCode.ALREADY_INITIALIZED: AlreadyInitializedError,
    StatusCode.ALREADY_PRESENT: AlreadyPresentError,
    StatusCode.NOT_FOUND: NotFoundError,
    StatusCode.NOT_INITIALIZED: NotInitializedError,
}


def raise_for_status(status: StatusCode, message: str | None = None) -> None:
    """Raise the error matching a failing status; `SUCCESS` is a no-op."""
    if status.is_success:
        return
    raise _ERRORS[status](message)
