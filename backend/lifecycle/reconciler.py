"""Early closure: a tenant declares their own request resolved.

This is the one path allowed to skip stages. Stages the request never
reached all collapse to the closing instant, so they read as bypassed rather
than timed, while anything a manager already recorded is kept as-is.
"""

from __future__ import annotations

import logging
from datetime import datetime

from lifecycle.backfill import backfill_stage_timestamps
from lifecycle.enums import RequestStatus, UpdatedByRole
from lifecycle.errors import ForbiddenError
from lifecycle.state import RequestState, Transition
from lifecycle.store import Clock, RequestStore, utc_now

logger = logging.getLogger(__name__)


def plan_close_early(state: RequestState, now: datetime) -> Transition:
    """Decide what closing ``state`` at ``now`` writes.

    A request that is already completed yields an empty transition.
    """
    if state.status is RequestStatus.COMPLETED:
        return Transition(target=RequestStatus.COMPLETED)

    changes: dict[str, object] = dict(
        backfill_stage_timestamps(state, RequestStatus.COMPLETED, now)
    )
    changes["status"] = RequestStatus.COMPLETED
    changes["last_updated_by_role"] = UpdatedByRole.TENANT
    return Transition(target=RequestStatus.COMPLETED, changes=changes)


async def close_early(
    store: RequestStore,
    request_id: int,
    actor_tenant_id: int,
    clock: Clock = utc_now,
) -> RequestState:
    """Jump a tenant's own request straight to ``completed``.

    Idempotent: closing a completed request returns it without writing.

    Raises:
        NotFoundError: from the store.
        ForbiddenError: the actor does not own the request.
    """
    state = await store.load(request_id)
    if state.tenant_id != actor_tenant_id:
        raise ForbiddenError("Only the tenant who submitted a request can close it")

    transition = plan_close_early(state, clock())
    if transition.is_noop:
        logger.debug("Request %d already completed", request_id)
        return state

    skipped = [
        name
        for name in transition.changes
        if name.endswith("_at") and name != "in_queue_at"
    ]
    logger.info(
        "Request %d closed early from %s (stamped: %s)",
        request_id,
        state.status.value,
        ", ".join(skipped),
    )
    return await store.save(request_id, transition.changes)
