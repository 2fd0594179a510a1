"""Column mixins shared by the search tables.

Ids are CUID2 strings generated client-side, so rows written by the history
recorder and analytics never need a RETURNING round trip for their key.
Company-scoped tables carry tenant_id, the column the RLS policies filter on.
"""

from datetime import datetime

from cuid2 import cuid_wrapper
from sqlalchemy import DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

new_id = cuid_wrapper()


class IdMixin:
    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=new_id)


class CompanyScopedMixin:
    """tenant_id -> company.id; rows go away with their company."""

    @declared_attr
    def tenant_id(cls) -> Mapped[str]:
        return mapped_column(
            String, ForeignKey("company.id", ondelete="CASCADE"), nullable=False, index=True
        )


class TimestampMixin:
    """Timezone-aware created_at / updated_at maintained by the database."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
        )


class CompanyScopedModel(IdMixin, CompanyScopedMixin, TimestampMixin):
    """id, tenant_id, created_at, updated_at: the shape of every searchable entity."""
