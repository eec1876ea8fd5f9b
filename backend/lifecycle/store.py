"""Collaborator contracts injected into the lifecycle operations."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Protocol

from lifecycle.state import RequestState

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Default clock: the current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class RequestStore(Protocol):
    """Persistence for one read-modify-write of a request.

    Implementations must make ``load`` followed by ``save`` atomic for a
    given request id (row lock or conditional update), and ``save`` must
    apply every change or none of them.
    """

    async def load(self, request_id: int) -> RequestState:
        """Return the current state, or raise NotFoundError."""
        ...

    async def save(
        self, request_id: int, changes: Mapping[str, object]
    ) -> RequestState:
        """Persist ``changes`` and return the resulting state."""
        ...
