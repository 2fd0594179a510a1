"""Substring search queries behind the global search sources.

Every method opens its own session: the aggregator runs the sources
concurrently and AsyncSession does not support concurrent use.
Patterns come pre-escaped from build_like_pattern; ILIKE uses ESCAPE '\\'.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, or_, select

from leaddesk.application.dtos.search import (
    AgentRecord,
    CallRecord,
    LeadRecord,
    StaffRecord,
)
from leaddesk.infrastructure.persistence.database import SessionFactory
from leaddesk.infrastructure.persistence.models import Agent, Call, Lead, User

_ESCAPE = "\\"

_LEAD_FIELDS: dict[str, Any] = {
    "name": Lead.name,
    "email": Lead.email,
    "mobile": Lead.mobile,
}


class SearchRepository:
    """ILIKE search over leads, staff accounts, agents and calls."""

    def __init__(self, session_factory: SessionFactory) -> None:
        self.session_factory = session_factory

    async def _fetch(self, stmt: Select) -> list[Any]:
        async with self.session_factory() as db:
            result = await db.execute(stmt)
            return list(result.mappings().all())

    async def search_leads(
        self, tenant_id: str | None, pattern: str, fields: tuple[str, ...], limit: int
    ) -> list[LeadRecord]:
        """Leads where any of fields matches; tenant_id None searches every tenant."""
        conditions = [_LEAD_FIELDS[f].ilike(pattern, escape=_ESCAPE) for f in fields]
        stmt = (
            select(Lead.id, Lead.name, Lead.email, Lead.mobile, Lead.status, Lead.source)
            .where(or_(*conditions))
            .order_by(Lead.created_at.desc(), Lead.id)
            .limit(limit)
        )
        if tenant_id is not None:
            stmt = stmt.where(Lead.tenant_id == tenant_id)
        rows = await self._fetch(stmt)
        return [
            LeadRecord(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                mobile=row["mobile"],
                status=row["status"],
                source=row["source"],
            )
            for row in rows
        ]

    async def search_staff(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[StaffRecord]:
        """Staff accounts in tenant whose name or email matches."""
        stmt = (
            select(User.id, User.name, User.email, User.phone, User.role)
            .where(
                User.tenant_id == tenant_id,
                or_(
                    User.name.ilike(pattern, escape=_ESCAPE),
                    User.email.ilike(pattern, escape=_ESCAPE),
                ),
            )
            .order_by(User.created_at.desc(), User.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt)
        return [
            StaffRecord(
                id=row["id"],
                name=row["name"],
                email=row["email"],
                phone=row["phone"],
                role=row["role"],
            )
            for row in rows
        ]

    async def search_agents(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[AgentRecord]:
        """Agents in tenant whose name matches."""
        stmt = (
            select(Agent.id, Agent.name, Agent.voice, Agent.tone, Agent.is_active)
            .where(Agent.tenant_id == tenant_id, Agent.name.ilike(pattern, escape=_ESCAPE))
            .order_by(Agent.created_at.desc(), Agent.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt)
        return [
            AgentRecord(
                id=row["id"],
                name=row["name"],
                voice=row["voice"],
                tone=row["tone"],
                is_active=row["is_active"],
            )
            for row in rows
        ]

    async def search_calls(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[CallRecord]:
        """Calls in tenant whose summary or transcript matches (inner join on lead)."""
        stmt = (
            select(
                Call.id,
                Call.status,
                Call.duration,
                Call.summary,
                Call.created_at,
                Lead.name.label("lead_name"),
            )
            .join(Lead, Lead.id == Call.lead_id)
            .where(
                Call.tenant_id == tenant_id,
                or_(
                    Call.summary.ilike(pattern, escape=_ESCAPE),
                    Call.transcript.ilike(pattern, escape=_ESCAPE),
                ),
            )
            .order_by(Call.created_at.desc(), Call.id)
            .limit(limit)
        )
        rows = await self._fetch(stmt)
        return [
            CallRecord(
                id=row["id"],
                status=row["status"],
                duration=row["duration"],
                summary=row["summary"],
                lead_name=row["lead_name"],
                created_at=row["created_at"],
            )
            for row in rows
        ]
