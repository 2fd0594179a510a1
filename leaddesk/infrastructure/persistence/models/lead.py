"""Lead ORM model (tenant-scoped)."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import CompanyScopedModel


class Lead(CompanyScopedModel, Base):
    """Real-estate lead under qualification. Table: lead."""

    __tablename__ = "lead"

    name: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    email: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    mobile: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    status: Mapped[str] = mapped_column(String, nullable=False, default="new")
    source: Mapped[str | None] = mapped_column(String, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
