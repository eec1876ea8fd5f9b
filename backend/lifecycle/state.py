"""Immutable snapshots of a request as seen by the lifecycle operations.

The lifecycle core never touches ORM objects directly; stores hand it a
``RequestState`` and receive back a ``Transition`` describing the columns to
write in a single update.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime

from lifecycle.enums import Priority, RequestStatus, UpdatedByRole
from lifecycle.stages import PIPELINE, STAGE_TIMESTAMP_FIELDS, stage_index


@dataclass(frozen=True)
class RequestState:
    """The status, priority and stage timestamps of one request."""

    request_id: int
    tenant_id: int
    status: RequestStatus = RequestStatus.IN_QUEUE
    priority: Priority = Priority.NORMAL
    last_updated_by_role: UpdatedByRole = UpdatedByRole.SYSTEM
    created_at: datetime | None = None
    in_queue_at: datetime | None = None
    viewed_at: datetime | None = None
    maintenance_requested_at: datetime | None = None
    implementing_actions_at: datetime | None = None
    completed_at: datetime | None = None

    @property
    def stage_index(self) -> int:
        return stage_index(self.status)

    def timestamp(self, stage: RequestStatus) -> datetime | None:
        """Return the recorded timestamp for ``stage``, if any."""
        return getattr(self, STAGE_TIMESTAMP_FIELDS[stage])

    def timestamps(self) -> list[datetime | None]:
        """Stage timestamps in pipeline order."""
        return [self.timestamp(stage) for stage in PIPELINE]

    def apply(self, changes: Mapping[str, object]) -> RequestState:
        """Return a copy with ``changes`` written over the current fields."""
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class Transition:
    """The outcome of planning an operation against a RequestState.

    ``changes`` maps column names to new values and is written atomically.
    An empty mapping means the operation is a no-op and nothing is saved.
    """

    target: RequestStatus
    changes: dict[str, object] = field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        return not self.changes
