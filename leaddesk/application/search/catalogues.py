"""Static catalogues: account settings destinations and application sections.

Pure in-memory substring filters (no I/O); the aggregator runs them
synchronously after the data-backed sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from leaddesk.application.dtos.search import SearchResultItem
from leaddesk.application.search.sources import SourceRequest, rank_by_position
from leaddesk.domain.enums import ResultType


@dataclass(frozen=True)
class CatalogueEntry:
    id: str
    title: str
    subtitle: str
    url: str
    keywords: tuple[str, ...] = ()


SETTINGS_CATALOGUE: tuple[CatalogueEntry, ...] = (
    CatalogueEntry("profile", "Profile Settings", "Manage your profile", "/settings"),
    CatalogueEntry("notifications", "Notification Settings", "Configure alerts", "/settings"),
    CatalogueEntry("integrations", "Integrations", "Connect external services", "/integrations"),
    CatalogueEntry("api-keys", "API Keys", "Manage API credentials", "/settings"),
    CatalogueEntry("company", "Company Settings", "Organization preferences", "/settings"),
)

NAVIGATION_CATALOGUE: tuple[CatalogueEntry, ...] = (
    CatalogueEntry(
        "dashboard", "Dashboard", "Overview & stats", "/dashboard",
        ("home", "overview", "stats", "metrics"),
    ),
    CatalogueEntry(
        "leads", "Leads", "Manage leads", "/leads",
        ("contacts", "prospects", "customers"),
    ),
    CatalogueEntry(
        "analytics", "Analytics", "Charts & insights", "/analytics",
        ("reports", "data", "charts", "graphs"),
    ),
    CatalogueEntry(
        "call-analytics", "Call Analytics", "Call metrics", "/call-analytics",
        ("calls", "phone", "conversations"),
    ),
    CatalogueEntry(
        "agents", "Agents", "AI voice agents", "/agents",
        ("ai", "voice", "bots", "assistants"),
    ),
    CatalogueEntry(
        "integrations", "Integrations", "Connect apps", "/integrations",
        ("connect", "apps", "services", "api"),
    ),
    CatalogueEntry(
        "settings", "Settings", "Preferences", "/settings",
        ("config", "preferences", "account"),
    ),
)


class CatalogueSource:
    """Case-insensitive substring filter over a fixed catalogue."""

    result_type: ClassVar[ResultType]
    base_priority: ClassVar[int]
    match_keywords: ClassVar[bool] = False
    # Navigation stays discoverable whatever the type filter says.
    ignores_filters: ClassVar[bool] = False

    def __init__(self, entries: tuple[CatalogueEntry, ...]) -> None:
        self.entries = entries

    def matches(self, entry: CatalogueEntry, needle: str) -> bool:
        if needle in entry.title.lower() or needle in entry.subtitle.lower():
            return True
        return self.match_keywords and any(needle in k for k in entry.keywords)

    def search(self, request: SourceRequest) -> list[SearchResultItem]:
        if not self.ignores_filters and not request.includes(self.result_type):
            return []
        if not request.needle:
            return []
        hits = [e for e in self.entries if self.matches(e, request.needle)]
        return rank_by_position(hits, self.base_priority, self._to_item)

    def _to_item(self, entry: CatalogueEntry, score: int) -> SearchResultItem:
        return SearchResultItem(
            id=entry.id,
            type=self.result_type,
            title=entry.title,
            subtitle=entry.subtitle,
            redirect_url=entry.url,
            priority_score=score,
        )


class SettingsSource(CatalogueSource):
    result_type = ResultType.SETTING
    base_priority = 50

    def __init__(self, entries: tuple[CatalogueEntry, ...] = SETTINGS_CATALOGUE) -> None:
        super().__init__(entries)


class NavigationSource(CatalogueSource):
    result_type = ResultType.NAVIGATION
    base_priority = 90
    match_keywords = True
    ignores_filters = True

    def __init__(self, entries: tuple[CatalogueEntry, ...] = NAVIGATION_CATALOGUE) -> None:
        super().__init__(entries)
