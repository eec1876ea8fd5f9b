"""The ordered status pipeline and the timestamp column recorded for each stage."""

from __future__ import annotations

from lifecycle.enums import Priority, RequestStatus
from lifecycle.errors import InvalidPriorityError, InvalidStatusError

# Enum declaration order is pipeline order.
PIPELINE: tuple[RequestStatus, ...] = tuple(RequestStatus)

STAGE_TIMESTAMP_FIELDS: dict[RequestStatus, str] = {
    RequestStatus.IN_QUEUE: "in_queue_at",
    RequestStatus.VIEWED: "viewed_at",
    RequestStatus.MAINTENANCE_REQUESTED: "maintenance_requested_at",
    RequestStatus.IMPLEMENTING_ACTIONS: "implementing_actions_at",
    RequestStatus.COMPLETED: "completed_at",
}

STAGE_LABELS: dict[RequestStatus, str] = {
    RequestStatus.IN_QUEUE: "In Queue",
    RequestStatus.VIEWED: "Viewed",
    RequestStatus.MAINTENANCE_REQUESTED: "Maintenance Requested",
    RequestStatus.IMPLEMENTING_ACTIONS: "Implementing Actions",
    RequestStatus.COMPLETED: "Completed",
}

PIPELINE_ORDER = " → ".join(STAGE_LABELS[stage] for stage in PIPELINE)

_STAGE_INDEX: dict[RequestStatus, int] = {
    stage: index for index, stage in enumerate(PIPELINE)
}


def stage_index(stage: RequestStatus) -> int:
    """Return the 0-based pipeline position of ``stage``."""
    return _STAGE_INDEX[stage]


def parse_status(value: object) -> RequestStatus:
    """Coerce a raw status value to a stage, or raise InvalidStatusError."""
    if isinstance(value, RequestStatus):
        return value
    try:
        return RequestStatus(value)
    except ValueError as exc:
        raise InvalidStatusError(value) from exc


def parse_priority(value: object) -> Priority:
    """Coerce a raw priority value, or raise InvalidPriorityError."""
    if isinstance(value, Priority):
        return value
    try:
        return Priority(value)
    except ValueError as exc:
        raise InvalidPriorityError(value) from exc
