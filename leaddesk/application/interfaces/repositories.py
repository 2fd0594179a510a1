"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from leaddesk.application.dtos.search import (
        AgentRecord,
        CallRecord,
        LeadRecord,
        RecentSearchResult,
        SearchClickCreate,
        StaffRecord,
    )
    from leaddesk.application.dtos.user import UserResult


class ISearchRepository(Protocol):
    """Protocol for the substring queries behind the data-source adapters.

    pattern is a ready-made ILIKE pattern (e.g. '%john%'). tenant_id None
    means no tenant filter (cross-tenant caller).
    """

    async def search_leads(
        self, tenant_id: str | None, pattern: str, fields: tuple[str, ...], limit: int
    ) -> list[LeadRecord]:
        """Return leads where any of fields (name, email, mobile) matches pattern."""

    async def search_staff(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[StaffRecord]:
        """Return staff accounts whose name or email matches pattern."""

    async def search_agents(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[AgentRecord]:
        """Return voice agents whose name matches pattern."""

    async def search_calls(
        self, tenant_id: str, pattern: str, limit: int
    ) -> list[CallRecord]:
        """Return calls whose summary or transcript matches pattern (joined to lead)."""


class IRecentSearchRepository(Protocol):
    """Protocol for per-caller recent searches (unique per caller and query)."""

    async def touch(self, user_id: str, query: str) -> None:
        """Insert or refresh (user_id, query) and prune beyond the retention count."""

    async def list_recent(self, user_id: str, limit: int) -> list[RecentSearchResult]:
        """Return the caller's most recent searches, newest first."""


class ISearchAnalyticsRepository(Protocol):
    """Protocol for the write-only search analytics log."""

    async def record_click(self, data: SearchClickCreate) -> None:
        """Persist one result-selection event."""


class IUserRepository(Protocol):
    """Protocol for staff account lookup (caller context)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return staff account by ID."""
