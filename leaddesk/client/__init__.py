"""Client side of global search: HTTP transport, incremental-search controller, command palette."""

from leaddesk.client.command_palette import (
    TYPE_LABELS,
    ActionMenuState,
    CommandPalette,
    highlight_segments,
)
from leaddesk.client.search_controller import SearchController, SearchState
from leaddesk.client.transport import SearchHit, SearchPayload, SearchTransport

__all__ = [
    "TYPE_LABELS",
    "ActionMenuState",
    "CommandPalette",
    "SearchController",
    "SearchHit",
    "SearchPayload",
    "SearchState",
    "SearchTransport",
    "highlight_segments",
]
