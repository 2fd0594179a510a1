"""Recent searches: upsert by (user_id, query) with count-based retention.

touch() refreshes created_at on repeats and, in the same transaction,
deletes the caller's rows beyond the newest `retention` entries.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from leaddesk.application.dtos.search import RecentSearchResult
from leaddesk.infrastructure.persistence.database import SessionFactory
from leaddesk.infrastructure.persistence.models import RecentSearch, new_id
from leaddesk.shared.utils.datetime import ensure_utc, utc_now

DEFAULT_RETENTION = 10


def _upsert_statement(dialect_name: str, values: dict[str, Any]) -> Any:
    """INSERT .. ON CONFLICT (user_id, query) DO UPDATE SET created_at."""
    insert = sqlite.insert if dialect_name == "sqlite" else postgresql.insert
    stmt = insert(RecentSearch).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[RecentSearch.user_id, RecentSearch.query],
        set_={"created_at": stmt.excluded.created_at},
    )


class RecentSearchRepository:
    """Per-caller recent searches (most recently touched first)."""

    def __init__(
        self, session_factory: SessionFactory, retention: int = DEFAULT_RETENTION
    ) -> None:
        self.session_factory = session_factory
        self.retention = retention

    async def touch(self, user_id: str, query: str) -> None:
        """Insert or refresh (user_id, query), then prune beyond retention."""
        async with self.session_factory(transactional=True) as db:
            values = {
                "id": new_id(),
                "user_id": user_id,
                "query": query,
                "created_at": utc_now(),
            }
            await db.execute(_upsert_statement(db.bind.dialect.name, values))
            await self._prune(db, user_id)

    async def _prune(self, db: AsyncSession, user_id: str) -> None:
        keep = (
            select(RecentSearch.id)
            .where(RecentSearch.user_id == user_id)
            .order_by(RecentSearch.created_at.desc(), RecentSearch.id.desc())
            .limit(self.retention)
        )
        await db.execute(
            delete(RecentSearch).where(
                RecentSearch.user_id == user_id,
                RecentSearch.id.not_in(keep),
            )
        )

    async def list_recent(self, user_id: str, limit: int) -> list[RecentSearchResult]:
        """Return up to limit queries, newest first."""
        stmt = (
            select(RecentSearch.query, RecentSearch.created_at)
            .where(RecentSearch.user_id == user_id)
            .order_by(RecentSearch.created_at.desc(), RecentSearch.id.desc())
            .limit(limit)
        )
        async with self.session_factory() as db:
            rows = (await db.execute(stmt)).all()
        return [
            RecentSearchResult(query=row.query, created_at=ensure_utc(row.created_at))
            for row in rows
        ]
