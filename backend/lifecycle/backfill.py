"""Stage timestamp back-fill shared by status advances and early closure.

Both operations move a request to some target stage and must leave every
stage up to that target timed, in non-decreasing order, without rewriting
a timestamp that was already recorded. This module is the single place that
decides which instant an untimed stage receives.
"""

from __future__ import annotations

from datetime import datetime

from lifecycle.enums import RequestStatus
from lifecycle.stages import PIPELINE, STAGE_TIMESTAMP_FIELDS, stage_index
from lifecycle.state import RequestState


def _earliest_set_after(state: RequestState, index: int) -> datetime | None:
    """Earliest recorded timestamp among stages after ``index``."""
    later = [ts for ts in state.timestamps()[index + 1 :] if ts is not None]
    return min(later) if later else None


def backfill_stage_timestamps(
    state: RequestState, target: RequestStatus, now: datetime
) -> dict[str, datetime]:
    """Compute timestamps for every untimed stage from ``in_queue`` to ``target``.

    Rules for an untimed stage:

    - ``in_queue`` gets the creation instant (``now`` if unknown).
    - A stage at or below the current status was passed through before
      timestamps were tracked; it collapses onto the previous stage's
      timestamp (creation instant, then ``now``, as fallbacks).
    - A stage above the current status, the target included, is reached
      now and gets ``now``.

    Each candidate is clamped between the previous stage's timestamp and the
    earliest timestamp already recorded after it, so the result is
    non-decreasing in pipeline order even for inconsistent legacy rows.

    Args:
        state: The request as currently persisted.
        target: The last stage that must be timed after the operation.
        now: The instant the operation happens.

    Returns:
        Column name -> timestamp for the stages that were untimed. Already
        recorded timestamps never appear in the result.
    """
    current_index = state.stage_index
    target_index = stage_index(target)
    changes: dict[str, datetime] = {}
    floor: datetime | None = None

    for index, stage in enumerate(PIPELINE[: target_index + 1]):
        existing = state.timestamp(stage)
        if existing is not None:
            floor = existing if floor is None else max(floor, existing)
            continue

        if stage is RequestStatus.IN_QUEUE:
            candidate = state.created_at or now
        elif index <= current_index:
            candidate = floor or state.created_at or now
        else:
            candidate = now

        ceiling = _earliest_set_after(state, index)
        if ceiling is not None and candidate > ceiling:
            candidate = ceiling
        if floor is not None and candidate < floor:
            candidate = floor

        changes[STAGE_TIMESTAMP_FIELDS[stage]] = candidate
        floor = candidate

    return changes
