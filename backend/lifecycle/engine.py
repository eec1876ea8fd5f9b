"""Status pipeline engine: manager-driven progression and priority triage.

A manager moves a request exactly one stage forward per call. Re-sending the
current status is an idempotent confirmation. Any skip or backward move is
rejected before anything is written.
"""

from __future__ import annotations

import logging
from datetime import datetime

from lifecycle.backfill import backfill_stage_timestamps
from lifecycle.enums import RequestStatus, UpdatedByRole, UserRole
from lifecycle.errors import ForbiddenError, OutOfOrderTransitionError
from lifecycle.stages import PIPELINE_ORDER, parse_priority, parse_status, stage_index
from lifecycle.state import RequestState, Transition
from lifecycle.store import Clock, RequestStore, utc_now

logger = logging.getLogger(__name__)


def _require_staff(actor_role: UserRole | str) -> None:
    try:
        role = UserRole(actor_role)
    except ValueError as exc:
        raise ForbiddenError("Only managers can perform this action") from exc
    if not role.is_staff:
        raise ForbiddenError("Only managers can perform this action")


def plan_advance(
    state: RequestState, requested: RequestStatus | str, now: datetime
) -> Transition:
    """Decide what advancing ``state`` to ``requested`` writes.

    Raises:
        InvalidStatusError: ``requested`` is not a pipeline stage.
        OutOfOrderTransitionError: ``requested`` is not the current stage
            or the one directly after it.
    """
    target = parse_status(requested)

    if target is state.status:
        return Transition(
            target=target,
            changes={"last_updated_by_role": UpdatedByRole.MANAGER},
        )

    if stage_index(target) != state.stage_index + 1:
        raise OutOfOrderTransitionError(
            state.status.value, target.value, PIPELINE_ORDER
        )

    changes: dict[str, object] = dict(backfill_stage_timestamps(state, target, now))
    changes["status"] = target
    changes["last_updated_by_role"] = UpdatedByRole.MANAGER
    return Transition(target=target, changes=changes)


async def advance_status(
    store: RequestStore,
    request_id: int,
    requested_status: RequestStatus | str | None,
    actor_role: UserRole | str,
    clock: Clock = utc_now,
) -> RequestState:
    """Move a request one stage forward on behalf of a manager.

    The requested status is validated before the request is loaded, so an
    unknown value is reported even for a missing request.

    Returns:
        The request state after the write.

    Raises:
        InvalidStatusError, OutOfOrderTransitionError, ForbiddenError,
        NotFoundError (from the store), PersistenceError (from the store).
    """
    _require_staff(actor_role)
    target = parse_status(requested_status)
    state = await store.load(request_id)

    try:
        transition = plan_advance(state, target, clock())
    except OutOfOrderTransitionError:
        logger.warning(
            "Rejected request %d transition %s -> %s",
            request_id,
            state.status.value,
            target.value,
        )
        raise

    updated = await store.save(request_id, transition.changes)
    if target is state.status:
        logger.debug("Request %d re-confirmed at %s", request_id, target.value)
    else:
        logger.info(
            "Request %d advanced %s -> %s", request_id, state.status.value, target.value
        )
    return updated


async def change_priority(
    store: RequestStore,
    request_id: int,
    priority: str | None,
    actor_role: UserRole | str,
) -> RequestState:
    """Set a request's priority. Status and stage timestamps are untouched."""
    _require_staff(actor_role)
    level = parse_priority(priority)
    state = await store.load(request_id)
    updated = await store.save(
        request_id,
        {"priority": level, "last_updated_by_role": UpdatedByRole.MANAGER},
    )
    logger.info(
        "Request %d priority %s -> %s",
        request_id,
        state.priority.value,
        level.value,
    )
    return updated
