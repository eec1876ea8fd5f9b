"""Fill stage timestamps missing from requests written before they were tracked.

Each row is repaired up to its own current status using the same back-fill
rules as the live operations; no stage beyond the current status is touched
and recorded timestamps are never changed.

Usage:
    python -m lifecycle.repair_timestamps          # dry-run
    python -m lifecycle.repair_timestamps --apply  # commit changes
"""

import asyncio
import logging
import sys
from datetime import datetime

from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from desk.crud.request import to_state
from desk.models.base import async_session_maker
from desk.models.request import MaintenanceRequest
from lifecycle.backfill import backfill_stage_timestamps
from lifecycle.stages import PIPELINE
from lifecycle.store import utc_now

logger = logging.getLogger(__name__)

BATCH_SIZE = 500

_STAGE_COLUMNS = (
    MaintenanceRequest.in_queue_at,
    MaintenanceRequest.viewed_at,
    MaintenanceRequest.maintenance_requested_at,
    MaintenanceRequest.implementing_actions_at,
    MaintenanceRequest.completed_at,
)


def _has_untimed_reached_stage():
    """Rows whose status is at or past some stage that has no timestamp."""
    return or_(
        *(
            and_(
                MaintenanceRequest.status.in_(PIPELINE[index:]),
                column.is_(None),
            )
            for index, column in enumerate(_STAGE_COLUMNS)
        )
    )


async def repair_rows(
    session: AsyncSession, *, dry_run: bool = True, now: datetime | None = None
) -> int:
    """Back-fill gaps in every request with an untimed stage it already reached.

    Rows are read in id order, ``BATCH_SIZE`` at a time, and each applied
    batch is committed before the next is fetched.

    Returns the number of requests that needed (or, with ``dry_run`` off,
    received) a repair.
    """
    now = now or utc_now()
    repaired = 0
    last_id = 0

    while True:
        stmt = (
            select(MaintenanceRequest)
            .where(_has_untimed_reached_stage(), MaintenanceRequest.id > last_id)
            .order_by(MaintenanceRequest.id)
            .limit(BATCH_SIZE)
        )
        result = await session.execute(stmt)
        rows = result.scalars().all()
        if not rows:
            break

        pending = 0
        for row in rows:
            state = to_state(row)
            changes = backfill_stage_timestamps(state, state.status, now)
            if not changes:
                continue

            logger.debug("Request %d: filling %s", row.id, ", ".join(changes))
            repaired += 1
            if dry_run:
                continue

            for name, value in changes.items():
                setattr(row, name, value)
            pending += 1

        if pending and not dry_run:
            await session.commit()
            logger.info("Committed %d repairs so far", repaired)

        last_id = rows[-1].id
        if len(rows) < BATCH_SIZE:
            break

    mode = "DRY-RUN" if dry_run else "APPLIED"
    logger.info("[%s] %d requests repaired", mode, repaired)
    return repaired


async def repair(*, dry_run: bool = True) -> int:
    async with async_session_maker() as session:
        return await repair_rows(session, dry_run=dry_run)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)-5.5s [%(name)s] %(message)s"
    )
    dry_run = "--apply" not in sys.argv
    if dry_run:
        logger.info("Running in dry-run mode (pass --apply to commit)")
    asyncio.run(repair(dry_run=dry_run))


if __name__ == "__main__":
    main()
