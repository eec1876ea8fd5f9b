"""Pydantic schemas module.

This module contains Pydantic models used for:
- API request/response validation
- Data transfer between the CRUD layer and the routers

Naming convention:
- Schema suffix to distinguish from SQLAlchemy models
"""

from desk.schemas.request import (
    CamelSchema,
    PriorityUpdateSchema,
    RequestCreateSchema,
    RequestSchema,
    RequestWithTenantSchema,
    StatusUpdateSchema,
    TenantContactSchema,
)

__all__ = [
    "CamelSchema",
    "PriorityUpdateSchema",
    "RequestCreateSchema",
    "RequestSchema",
    "RequestWithTenantSchema",
    "StatusUpdateSchema",
    "TenantContactSchema",
]
