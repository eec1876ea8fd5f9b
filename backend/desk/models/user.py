"""User accounts. Managed by the login service; read-only here."""

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from desk.models.base import Base, TimestampMixin, enum_column
from desk.models.enums import UserRole

if TYPE_CHECKING:
    from desk.models.request import MaintenanceRequest


class User(Base, TimestampMixin):
    """A tenant, manager or admin account."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole, "user_role_enum"), nullable=False
    )

    requests: Mapped[list["MaintenanceRequest"]] = relationship(
        back_populates="tenant"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role={self.role})>"
