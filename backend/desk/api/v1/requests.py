"""Maintenance request endpoints for tenants and managers."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from desk.core.auth import Actor, get_current_actor, require_manager, require_tenant
from desk.crud.request import (
    SqlRequestStore,
    create_request,
    get_request,
    list_all_requests,
    list_requests_for_tenant,
)
from desk.models.base import get_async_session
from desk.schemas.request import (
    PriorityUpdateSchema,
    RequestCreateSchema,
    RequestSchema,
    RequestWithTenantSchema,
    StatusUpdateSchema,
)
from lifecycle.engine import advance_status, change_priority
from lifecycle.errors import NotFoundError
from lifecycle.reconciler import close_early

router = APIRouter()


async def _reload(session: AsyncSession, request_id: int) -> RequestSchema:
    result = await get_request(session, request_id)
    if result is None:
        raise NotFoundError(request_id)
    return result


@router.post("", status_code=201)
async def submit_request(
    payload: RequestCreateSchema,
    actor: Actor = Depends(require_tenant),
    session: AsyncSession = Depends(get_async_session),
) -> RequestSchema:
    """Create a new request owned by the calling tenant."""
    return await create_request(session, actor.user_id, payload)


@router.get("/mine")
async def my_requests(
    actor: Actor = Depends(require_tenant),
    session: AsyncSession = Depends(get_async_session),
) -> list[RequestSchema]:
    """List the calling tenant's requests, newest first."""
    return await list_requests_for_tenant(session, actor.user_id)


@router.get("")
async def all_requests(
    actor: Actor = Depends(require_manager),
    session: AsyncSession = Depends(get_async_session),
) -> list[RequestWithTenantSchema]:
    """List every request with tenant contact details."""
    return await list_all_requests(session)


@router.get("/{request_id}")
async def read_request(
    request_id: int,
    actor: Actor = Depends(get_current_actor),
    session: AsyncSession = Depends(get_async_session),
) -> RequestSchema:
    """Return one request to its owner or to any manager."""
    result = await get_request(session, request_id)
    if result is None:
        raise HTTPException(status_code=404, detail=f"Request {request_id} not found")
    if not actor.role.is_staff and result.tenant_id != actor.user_id:
        raise HTTPException(status_code=403, detail="Not your request")
    return result


@router.patch("/{request_id}/status")
async def update_status(
    request_id: int,
    payload: StatusUpdateSchema,
    actor: Actor = Depends(require_manager),
    session: AsyncSession = Depends(get_async_session),
) -> RequestSchema:
    """Advance a request one stage along the pipeline."""
    store = SqlRequestStore(session)
    await advance_status(store, request_id, payload.status, actor.role)
    return await _reload(session, request_id)


@router.patch("/{request_id}/priority")
async def update_priority(
    request_id: int,
    payload: PriorityUpdateSchema,
    actor: Actor = Depends(require_manager),
    session: AsyncSession = Depends(get_async_session),
) -> RequestSchema:
    """Change a request's priority."""
    store = SqlRequestStore(session)
    await change_priority(store, request_id, payload.priority, actor.role)
    return await _reload(session, request_id)


@router.patch("/{request_id}/close")
async def close_request(
    request_id: int,
    actor: Actor = Depends(require_tenant),
    session: AsyncSession = Depends(get_async_session),
) -> RequestSchema:
    """Mark the tenant's own request as completed."""
    store = SqlRequestStore(session)
    await close_early(store, request_id, actor.user_id)
    return await _reload(session, request_id)
