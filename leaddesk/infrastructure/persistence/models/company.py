"""Company ORM model. Root entity of the tenant hierarchy (no tenant_id)."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import IdMixin, TimestampMixin


class Company(IdMixin, TimestampMixin, Base):
    """Tenant. Table: company."""

    __tablename__ = "company"

    name: Mapped[str] = mapped_column(String, nullable=False)
