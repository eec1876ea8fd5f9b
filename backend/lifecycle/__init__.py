"""Request lifecycle: the status pipeline and its stage timestamps.

- engine: manager-driven one-step progression and priority changes.
- reconciler: tenant-initiated early closure.
- backfill: the timestamp rules both of them share.
- enums: statuses, priorities and roles, shared with the database models.

The operations take their store and clock as arguments and hold no state.
"""

from lifecycle.engine import advance_status, change_priority, plan_advance
from lifecycle.enums import Priority, RequestStatus, UpdatedByRole, UserRole
from lifecycle.errors import (
    ForbiddenError,
    InvalidPriorityError,
    InvalidStatusError,
    LifecycleError,
    NotFoundError,
    OutOfOrderTransitionError,
    PersistenceError,
)
from lifecycle.reconciler import close_early, plan_close_early
from lifecycle.state import RequestState, Transition
from lifecycle.store import Clock, RequestStore, utc_now

__all__ = [
    "Clock",
    "ForbiddenError",
    "InvalidPriorityError",
    "InvalidStatusError",
    "LifecycleError",
    "NotFoundError",
    "OutOfOrderTransitionError",
    "PersistenceError",
    "Priority",
    "RequestState",
    "RequestStatus",
    "RequestStore",
    "Transition",
    "UpdatedByRole",
    "UserRole",
    "advance_status",
    "change_priority",
    "close_early",
    "plan_advance",
    "plan_close_early",
    "utc_now",
]
