"""Staff account ORM model (tenant-scoped)."""

from sqlalchemy import Boolean, CheckConstraint, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from leaddesk.domain.enums import UserRole
from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import CompanyScopedModel


class User(CompanyScopedModel, Base):
    """Staff account. Table: app_user. Unique (tenant_id, email)."""

    __tablename__ = "app_user"

    name: Mapped[str | None] = mapped_column(String, nullable=True)
    email: Mapped[str] = mapped_column(String, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String, nullable=True)
    role: Mapped[str] = mapped_column(
        String, nullable=False, default=UserRole.AGENT.value
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )

    __table_args__ = (
        UniqueConstraint("tenant_id", "email", name="uq_app_user_tenant_email"),
        CheckConstraint(
            "role IN ({})".format(", ".join(f"'{r.value}'" for r in UserRole)),
            name="app_user_role_check",
        ),
    )
