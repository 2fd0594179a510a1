"""HTTP transport for the global search API (httpx).

Cancellation is task cancellation: cancelling the asyncio task awaiting
search() makes httpx abort the in-flight request.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx

from leaddesk.domain.exceptions import AuthenticationException, SearchRequestException

TokenProvider = Callable[[], Awaitable[str | None]]


@dataclass(frozen=True)
class SearchHit:
    """One result as received by the client."""

    id: str
    type: str
    title: str
    subtitle: str | None
    redirect_url: str
    priority_score: int
    metadata: dict[str, Any] | None = None

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SearchHit":
        return cls(
            id=str(data["id"]),
            type=str(data["type"]),
            title=str(data.get("title") or ""),
            subtitle=data.get("subtitle"),
            redirect_url=str(data.get("redirectUrl") or "/"),
            priority_score=int(data.get("priorityScore") or 0),
            metadata=data.get("metadata"),
        )


@dataclass
class SearchPayload:
    """Decoded POST /search response."""

    results: list[SearchHit] = field(default_factory=list)
    categories: dict[str, list[SearchHit]] = field(default_factory=dict)
    total_count: int = 0
    query: str = ""
    intents: list[str] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "SearchPayload":
        return cls(
            results=[SearchHit.from_json(r) for r in data.get("results") or []],
            categories={
                key: [SearchHit.from_json(r) for r in items]
                for key, items in (data.get("categories") or {}).items()
            },
            total_count=int(data.get("totalCount") or 0),
            query=str(data.get("query") or ""),
            intents=list(data.get("intents") or []),
        )


class SearchTransport:
    """Talks to /api/v1/search with the caller's bearer token."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.token_provider = token_provider
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def _headers(self) -> dict[str, str]:
        token = await self.token_provider()
        if not token:
            raise AuthenticationException("Not authenticated")
        return {"Authorization": f"Bearer {token}"}

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.status_code == 401:
            raise AuthenticationException("Not authenticated")
        if response.is_error:
            raise SearchRequestException(response.status_code)

    async def search(
        self, query: str, filters: Iterable[str] = (), limit: int = 10
    ) -> SearchPayload:
        """POST /api/v1/search and decode the response.

        Raises:
            AuthenticationException: No token, or the service rejected it.
            SearchRequestException: Any other non-success status.
        """
        response = await self.client.post(
            "/api/v1/search",
            json={"query": query, "filters": list(filters), "limit": limit},
            headers=await self._headers(),
        )
        self._raise_for_status(response)
        return SearchPayload.from_json(response.json())

    async def recent_searches(self, limit: int = 5) -> list[str]:
        """Recent query strings, newest first."""
        response = await self.client.get(
            "/api/v1/search/recent",
            params={"limit": limit},
            headers=await self._headers(),
        )
        self._raise_for_status(response)
        return [item["query"] for item in response.json()]

    async def record_click(
        self,
        query: str,
        hit: SearchHit,
        results_count: int,
        time_to_click_ms: int | None = None,
    ) -> None:
        response = await self.client.post(
            "/api/v1/search/clicks",
            json={
                "query": query,
                "resultType": hit.type,
                "resultId": hit.id,
                "resultsCount": results_count,
                "timeToClickMs": time_to_click_ms,
            },
            headers=await self._headers(),
        )
        self._raise_for_status(response)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
