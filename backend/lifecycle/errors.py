"""Errors raised by the request lifecycle operations.

Every error is terminal for the call that raised it; nothing here is retried.
``status_code`` is the HTTP status the web layer reports it as.
"""

from __future__ import annotations


class LifecycleError(Exception):
    """Base class for client-visible lifecycle rejections."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidStatusError(LifecycleError):
    """The requested status is not one of the pipeline stages."""

    def __init__(self, value: object) -> None:
        super().__init__("Invalid status")
        self.value = value


class InvalidPriorityError(LifecycleError):
    """The requested priority is not one of the known levels."""

    def __init__(self, value: object) -> None:
        super().__init__("Invalid priority")
        self.value = value


class OutOfOrderTransitionError(LifecycleError):
    """A manager tried to skip a stage or move backward."""

    def __init__(self, current: str, requested: str, order: str) -> None:
        super().__init__(f"Status must be updated in order: {order}.")
        self.current = current
        self.requested = requested


class NotFoundError(LifecycleError):
    """No request exists with the given id."""

    status_code = 404

    def __init__(self, request_id: int) -> None:
        super().__init__(f"Request {request_id} not found")
        self.request_id = request_id


class ForbiddenError(LifecycleError):
    """The actor lacks the role or ownership the operation needs."""

    status_code = 403


class PersistenceError(LifecycleError):
    """The store failed to read or write; distinct from client errors."""

    status_code = 500
