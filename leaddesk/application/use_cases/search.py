"""Global search use case: fan out to every source, merge, rank, categorize.

Ranking is a stable sort on priority_score (descending). Sources pre-score
their items as base priority minus position, so the merged order is fully
deterministic.

results is capped at the requested limit; categories and total_count are
NOT capped. The command palette renders uncapped grouped sections while
flat consumers get a capped list.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Any

from leaddesk.application.dtos.search import AggregatedSearch, SearchResultItem
from leaddesk.application.dtos.user import CallerContext
from leaddesk.application.search.catalogues import CatalogueSource
from leaddesk.application.search.sources import SearchSource, SourceRequest
from leaddesk.application.services.intent_classifier import classify_intent
from leaddesk.application.services.query_sanitizer import (
    build_like_pattern,
    sanitize_query,
)
from leaddesk.domain.enums import SEARCH_FILTERS
from leaddesk.shared.telemetry.tracing import add_span_attributes, traced

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MIN_QUERY_LENGTH = 2

HistoryRecorder = Callable[[str, str], None]


def rank_results(items: Iterable[SearchResultItem]) -> list[SearchResultItem]:
    """Sort by priority_score descending; equal scores keep input order."""
    return sorted(items, key=lambda item: -item.priority_score)


def group_by_type(items: Iterable[SearchResultItem]) -> dict[str, list[SearchResultItem]]:
    """Bucket items by type tag; buckets appear in order of first occurrence."""
    categories: dict[str, list[SearchResultItem]] = {}
    for item in items:
        categories.setdefault(item.type.value, []).append(item)
    return categories


class GlobalSearchService:
    """Aggregates data-backed sources (concurrently) and static catalogues."""

    def __init__(
        self,
        sources: Sequence[SearchSource],
        catalogues: Sequence[CatalogueSource],
        history_recorder: HistoryRecorder | None = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
        min_query_length: int = MIN_QUERY_LENGTH,
    ) -> None:
        self.sources = list(sources)
        self.catalogues = list(catalogues)
        self.history_recorder = history_recorder
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.min_query_length = min_query_length

    def normalize_limit(self, limit: Any) -> int:
        """Default for missing, non-integer or non-positive limits; capped at max_limit."""
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            return self.default_limit
        return min(limit, self.max_limit)

    @staticmethod
    def normalize_filters(filters: Iterable[Any] | None) -> frozenset[str]:
        """String filter names; other entries are dropped.

        Unknown names are kept so they match no source: a filter set made only
        of unknown names narrows the search to navigation instead of widening
        it to everything.
        """
        if not filters:
            return frozenset()
        names = frozenset(f for f in filters if isinstance(f, str))
        if names - SEARCH_FILTERS:
            logger.debug("Unknown search filters: %s", sorted(names - SEARCH_FILTERS))
        return names

    @traced("search.aggregate")
    async def aggregate(
        self,
        query: Any,
        caller: CallerContext,
        filters: Iterable[Any] | None = None,
        limit: Any = None,
    ) -> AggregatedSearch:
        """Run a global search for caller.

        Queries shorter than min_query_length (after trimming) return an empty
        result. Source failures contribute nothing; an unexpected failure of the
        aggregation itself degrades to an empty result with intents ['text'].
        """
        text = query if isinstance(query, str) else ""
        trimmed = text.strip()
        if len(trimmed) < self.min_query_length:
            return AggregatedSearch.empty(text)

        limit = self.normalize_limit(limit)
        try:
            intents = classify_intent(text)
            request = SourceRequest(
                text=trimmed,
                needle=sanitize_query(trimmed).lower(),
                pattern=build_like_pattern(trimmed),
                intents=tuple(intents),
                caller=caller,
                limit=limit,
                filters=self.normalize_filters(filters),
            )
            batches = await self._run_sources(request)
            batches.extend(catalogue.search(request) for catalogue in self.catalogues)
        except Exception:
            logger.exception("Global search aggregation failed for caller %s", caller.caller_id)
            return AggregatedSearch.empty(text)

        ranked = rank_results(item for batch in batches for item in batch)
        categories = group_by_type(ranked)
        add_span_attributes(**{"search.total": len(ranked)})

        self._record_history(caller.caller_id, trimmed)

        return AggregatedSearch(
            results=ranked[:limit],
            categories=categories,
            total_count=len(ranked),
            query=text,
            intents=[intent.value for intent in intents],
        )

    async def _run_sources(self, request: SourceRequest) -> list[list[SearchResultItem]]:
        """Run every data-backed source concurrently; a failed task yields []."""
        outcomes = await asyncio.gather(
            *(source.search(request) for source in self.sources),
            return_exceptions=True,
        )
        batches: list[list[SearchResultItem]] = []
        for source, outcome in zip(self.sources, outcomes):
            if isinstance(outcome, BaseException):
                if isinstance(outcome, asyncio.CancelledError):
                    raise outcome
                logger.warning("%s search raised: %s", source.name, outcome)
                batches.append([])
            else:
                batches.append(outcome)
        return batches

    def _record_history(self, caller_id: str, query: str) -> None:
        """Hand the query to the recorder; never affects the response."""
        if self.history_recorder is None:
            return
        try:
            self.history_recorder(caller_id, query)
        except Exception:
            logger.warning("Could not schedule recent search write", exc_info=True)

