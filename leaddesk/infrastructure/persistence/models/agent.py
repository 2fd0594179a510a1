"""AI voice agent ORM model (tenant-scoped)."""

from sqlalchemy import Boolean, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import CompanyScopedModel


class Agent(CompanyScopedModel, Base):
    """Voice-calling agent configuration. Table: agent."""

    __tablename__ = "agent"

    name: Mapped[str] = mapped_column(String, nullable=False, index=True)
    voice: Mapped[str] = mapped_column(String, nullable=False)
    tone: Mapped[str | None] = mapped_column(String, nullable=True)
    personality: Mapped[str | None] = mapped_column(Text, nullable=True)
    greeting: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("true")
    )
