"""Call ORM model: one AI voice call with a lead (tenant-scoped)."""

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import CompanyScopedModel


class Call(CompanyScopedModel, Base):
    """Table: call. lead_id references lead (CASCADE)."""

    __tablename__ = "call"

    lead_id: Mapped[str] = mapped_column(
        String, ForeignKey("lead.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    transcript: Mapped[str | None] = mapped_column(Text, nullable=True)
