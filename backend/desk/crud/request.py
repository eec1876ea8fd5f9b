"""CRUD operations for maintenance requests."""

import logging
from collections.abc import Mapping
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from desk.models.enums import (
    PreferredTimeWindow,
    Priority,
    RequestStatus,
    UpdatedByRole,
)
from desk.models.request import MaintenanceRequest
from desk.schemas.request import (
    RequestCreateSchema,
    RequestSchema,
    RequestWithTenantSchema,
)
from lifecycle.errors import NotFoundError, PersistenceError
from lifecycle.state import RequestState
from lifecycle.store import utc_now

logger = logging.getLogger(__name__)


def to_state(row: MaintenanceRequest) -> RequestState:
    """Snapshot the columns the lifecycle core reasons about."""
    return RequestState(
        request_id=row.id,
        tenant_id=row.tenant_id,
        status=RequestStatus(row.status),
        priority=Priority(row.priority),
        last_updated_by_role=UpdatedByRole(row.last_updated_by_role),
        created_at=row.created_at,
        in_queue_at=row.in_queue_at,
        viewed_at=row.viewed_at,
        maintenance_requested_at=row.maintenance_requested_at,
        implementing_actions_at=row.implementing_actions_at,
        completed_at=row.completed_at,
    )


class SqlRequestStore:
    """RequestStore backed by one AsyncSession.

    ``load`` takes a row lock (``SELECT ... FOR UPDATE``) that is held until
    ``save`` commits, so concurrent writers to the same request serialize.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._rows: dict[int, MaintenanceRequest] = {}

    async def _fetch(self, request_id: int) -> MaintenanceRequest:
        stmt = (
            select(MaintenanceRequest)
            .where(MaintenanceRequest.id == request_id)
            .with_for_update()
        )
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise PersistenceError("Failed to load request") from exc
        row = result.scalar_one_or_none()
        if row is None:
            raise NotFoundError(request_id)
        self._rows[request_id] = row
        return row

    async def load(self, request_id: int) -> RequestState:
        return to_state(await self._fetch(request_id))

    async def save(
        self, request_id: int, changes: Mapping[str, object]
    ) -> RequestState:
        row = self._rows.get(request_id) or await self._fetch(request_id)
        for name, value in changes.items():
            setattr(row, name, value)
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            logger.error("Failed to save request %d: %s", request_id, exc)
            raise PersistenceError("Failed to update request") from exc
        return to_state(row)


def _coerce(enum_class: type, value: str | None, default: object) -> object:
    """Return ``enum_class(value)``, or ``default`` when value is unknown."""
    try:
        return enum_class(value)
    except ValueError:
        return default


async def create_request(
    session: AsyncSession,
    tenant_id: int,
    payload: RequestCreateSchema,
    now: datetime | None = None,
) -> RequestSchema:
    """Insert a new request in ``in_queue``, timed at its creation instant.

    Unknown priorities fall back to ``normal`` and unknown time windows to
    no preference, rather than rejecting the submission.
    """
    now = now or utc_now()
    row = MaintenanceRequest(
        unit=payload.unit,
        category=payload.category,
        description=payload.description,
        phone=payload.phone,
        priority=_coerce(Priority, payload.priority, Priority.NORMAL),
        preferred_time_window=_coerce(
            PreferredTimeWindow, payload.preferred_time_window, None
        ),
        access_instructions=payload.access_instructions or None,
        tenant_id=tenant_id,
        status=RequestStatus.IN_QUEUE,
        last_updated_by_role=UpdatedByRole.TENANT,
        created_at=now,
        updated_at=now,
        in_queue_at=now,
    )
    session.add(row)
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise PersistenceError("Failed to create request") from exc
    await session.refresh(row)
    logger.info("Tenant %d created request %d", tenant_id, row.id)
    return RequestSchema.model_validate(row)


async def get_request(
    session: AsyncSession, request_id: int
) -> RequestSchema | None:
    """Return a request by ID."""
    stmt = select(MaintenanceRequest).where(MaintenanceRequest.id == request_id)
    result = await session.execute(stmt)
    row = result.scalar_one_or_none()

    if row is None:
        return None

    return RequestSchema.model_validate(row)


async def list_requests_for_tenant(
    session: AsyncSession, tenant_id: int
) -> list[RequestSchema]:
    """Return a tenant's own requests, newest first."""
    stmt = (
        select(MaintenanceRequest)
        .where(MaintenanceRequest.tenant_id == tenant_id)
        .order_by(MaintenanceRequest.created_at.desc())
    )
    result = await session.execute(stmt)
    return [RequestSchema.model_validate(row) for row in result.scalars().all()]


async def list_all_requests(session: AsyncSession) -> list[RequestWithTenantSchema]:
    """Return every request with its tenant's contact details, newest first."""
    stmt = (
        select(MaintenanceRequest)
        .options(selectinload(MaintenanceRequest.tenant))
        .order_by(MaintenanceRequest.created_at.desc())
    )
    result = await session.execute(stmt)
    return [
        RequestWithTenantSchema.model_validate(row) for row in result.scalars().all()
    ]
