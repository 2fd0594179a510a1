"""Global search sources (per-type adapters) and static catalogues."""

from leaddesk.application.search.catalogues import (
    NAVIGATION_CATALOGUE,
    SETTINGS_CATALOGUE,
    CatalogueEntry,
    CatalogueSource,
    NavigationSource,
    SettingsSource,
)
from leaddesk.application.search.sources import (
    AgentSource,
    CallSource,
    LeadSource,
    SearchSource,
    SourceRequest,
    StaffSource,
    default_sources,
    rank_by_position,
)

__all__ = [
    "NAVIGATION_CATALOGUE",
    "SETTINGS_CATALOGUE",
    "AgentSource",
    "CallSource",
    "CatalogueEntry",
    "CatalogueSource",
    "LeadSource",
    "NavigationSource",
    "SearchSource",
    "SettingsSource",
    "SourceRequest",
    "StaffSource",
    "default_sources",
    "rank_by_position",
]
