"""Pydantic schemas for maintenance request endpoints.

JSON field names are camelCase (``inQueueAt``, ``lastUpdatedByRole``); enum
values are sent verbatim (``"maintenance_requested"``).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from desk.models.enums import (
    PreferredTimeWindow,
    Priority,
    RequestStatus,
    UpdatedByRole,
)


class CamelSchema(BaseModel):
    """Base for schemas exchanged with the frontend."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class RequestCreateSchema(CamelSchema):
    """Body of a tenant's new request.

    ``priority`` and ``preferred_time_window`` are kept as raw strings; an
    unrecognised value falls back to a default instead of failing.
    """

    unit: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    priority: str | None = None
    preferred_time_window: str | None = None
    access_instructions: str | None = None


class StatusUpdateSchema(BaseModel):
    status: str | None = None


class PriorityUpdateSchema(BaseModel):
    priority: str | None = None


class RequestSchema(CamelSchema):
    """A maintenance request with its full pipeline history."""

    id: int
    unit: str
    category: str
    description: str
    phone: str
    status: RequestStatus
    priority: Priority
    preferred_time_window: PreferredTimeWindow | None = None
    access_instructions: str | None = None
    tenant_id: int
    last_updated_by_role: UpdatedByRole
    created_at: datetime
    updated_at: datetime
    in_queue_at: datetime | None = None
    viewed_at: datetime | None = None
    maintenance_requested_at: datetime | None = None
    implementing_actions_at: datetime | None = None
    completed_at: datetime | None = None


class TenantContactSchema(CamelSchema):
    name: str
    email: str


class RequestWithTenantSchema(RequestSchema):
    """Manager view of a request, including who submitted it."""

    tenant: TenantContactSchema
