"""MaintenanceRequest model: one tenant-reported issue and its pipeline history."""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from desk.models.base import Base, TimestampMixin, enum_column
from desk.models.enums import (
    PreferredTimeWindow,
    Priority,
    RequestStatus,
    UpdatedByRole,
)

if TYPE_CHECKING:
    from desk.models.user import User


class MaintenanceRequest(Base, TimestampMixin):
    """A maintenance request submitted by a tenant.

    ``status`` and the five stage timestamps are only written through the
    lifecycle operations; every other column is plain intake metadata.
    """

    __tablename__ = "maintenance_request"

    id: Mapped[int] = mapped_column(primary_key=True)
    unit: Mapped[str] = mapped_column(String(50), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        enum_column(RequestStatus, "request_status_enum"),
        default=RequestStatus.IN_QUEUE,
        nullable=False,
    )
    priority: Mapped[Priority] = mapped_column(
        enum_column(Priority, "priority_enum"),
        default=Priority.NORMAL,
        nullable=False,
    )
    preferred_time_window: Mapped[PreferredTimeWindow | None] = mapped_column(
        enum_column(PreferredTimeWindow, "preferred_time_window_enum"),
        nullable=True,
    )
    access_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    tenant_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="RESTRICT"), nullable=False
    )
    last_updated_by_role: Mapped[UpdatedByRole] = mapped_column(
        enum_column(UpdatedByRole, "updated_by_role_enum"),
        default=UpdatedByRole.SYSTEM,
        nullable=False,
    )

    # Stage timestamps, append-only
    in_queue_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    viewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    maintenance_requested_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    implementing_actions_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    tenant: Mapped["User"] = relationship(back_populates="requests")

    __table_args__ = (
        Index("idx_maintenance_request_tenant", "tenant_id"),
        Index("idx_maintenance_request_status", "status"),
        Index("idx_maintenance_request_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<MaintenanceRequest(id={self.id}, status={self.status})>"
