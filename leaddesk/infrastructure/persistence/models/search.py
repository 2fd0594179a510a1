"""Recent search and search analytics ORM models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from leaddesk.infrastructure.persistence.database import Base
from leaddesk.infrastructure.persistence.models.mixins import IdMixin


class RecentSearch(IdMixin, Base):
    """Caller's recent query. Table: recent_search. Unique (user_id, query).

    created_at is refreshed on every repeat of the same query; rows beyond
    the retention count are pruned after each write.
    """

    __tablename__ = "recent_search"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    query: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    __table_args__ = (
        UniqueConstraint("user_id", "query", name="uq_recent_search_user_query"),
    )


class SearchAnalytics(IdMixin, Base):
    """Result selection event (write-only here). Table: search_analytics."""

    __tablename__ = "search_analytics"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("company.id", ondelete="SET NULL"), nullable=True
    )
    query: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    result_type: Mapped[str | None] = mapped_column(String, nullable=True)
    result_id: Mapped[str | None] = mapped_column(String, nullable=True)
    results_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    time_to_click_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
