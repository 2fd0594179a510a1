"""Command palette: open/close, keyboard selection, activation, highlighting.

The selectable list is the concatenation of the controller's categories in
map order (uncapped), matching the grouped sections that get rendered.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from leaddesk.client.search_controller import SearchController
from leaddesk.client.transport import SearchHit

TYPE_LABELS: dict[str, str] = {
    "lead": "Leads",
    "user": "Users",
    "agent": "Agents",
    "call": "Calls",
    "setting": "Settings",
    "navigation": "Pages",
}

Navigate = Callable[[str], None]


def highlight_segments(text: str, query: str) -> list[tuple[str, bool]]:
    """Split text into (segment, is_match) pairs for every case-insensitive hit of query.

    Queries shorter than 2 characters highlight nothing.
    """
    if not query or len(query) < 2:
        return [(text, False)]
    parts = re.split(f"({re.escape(query)})", text, flags=re.IGNORECASE)
    # re.split with one capture group puts matches at odd indices.
    return [(part, i % 2 == 1) for i, part in enumerate(parts) if part]


class ActionMenuState:
    """Which row's action menu is open; at most one at a time."""

    def __init__(self) -> None:
        self.open_menu_id: str | None = None

    def is_open(self, menu_id: str) -> bool:
        return self.open_menu_id == menu_id

    def open(self, menu_id: str) -> None:
        self.open_menu_id = menu_id

    def toggle(self, menu_id: str) -> None:
        self.open_menu_id = None if self.open_menu_id == menu_id else menu_id

    def close(self) -> None:
        self.open_menu_id = None


class CommandPalette:
    """Keyboard-driven search dialog over a SearchController."""

    def __init__(self, controller: SearchController, navigate: Navigate) -> None:
        self.controller = controller
        self.navigate = navigate
        self.is_open = False
        self.selected_index = 0
        self.action_menu = ActionMenuState()
        self._seen_results: list[SearchHit] | None = controller.results
        controller.add_listener(self._on_controller_change)

    def _on_controller_change(self, controller: SearchController) -> None:
        if controller.results is not self._seen_results:
            self._seen_results = controller.results
            self.selected_index = 0
            self.action_menu.close()

    @property
    def flat_results(self) -> list[SearchHit]:
        return [hit for hits in self.controller.categories.values() for hit in hits]

    @property
    def selected(self) -> SearchHit | None:
        flat = self.flat_results
        if 0 <= self.selected_index < len(flat):
            return flat[self.selected_index]
        return None

    def sections(self) -> list[tuple[str, list[SearchHit]]]:
        """(label, hits) per category in rendering order."""
        return [
            (TYPE_LABELS.get(key, key.title()), hits)
            for key, hits in self.controller.categories.items()
            if hits
        ]

    def highlight(self, text: str) -> list[tuple[str, bool]]:
        return highlight_segments(text, self.controller.query)

    # -- open / close --------------------------------------------------

    def open(self) -> None:
        self.is_open = True
        self.selected_index = 0

    def close(self) -> None:
        """Close and forget the query and results."""
        self.is_open = False
        self.action_menu.close()
        self.controller.clear()
        self.selected_index = 0

    def toggle(self) -> None:
        if self.is_open:
            self.close()
        else:
            self.open()

    def click_outside(self) -> None:
        if self.is_open:
            self.close()

    # -- input ---------------------------------------------------------

    def set_query(self, text: str) -> None:
        self.controller.set_query(text)

    def select_recent(self, query: str) -> None:
        self.controller.set_query(query)

    def handle_global_key(
        self,
        key: str,
        ctrl: bool = False,
        meta: bool = False,
        input_focused: bool = False,
    ) -> bool:
        """Document-level shortcut. Returns True when the key was consumed."""
        if (ctrl or meta) and key.lower() == "k":
            self.toggle()
            return True
        if key == "/" and not self.is_open and not input_focused:
            self.open()
            return True
        return False

    def handle_key(self, key: str) -> bool:
        """Key pressed inside the palette input. Returns True when consumed."""
        if key == "ArrowDown":
            self.move_selection(1)
        elif key == "ArrowUp":
            self.move_selection(-1)
        elif key == "Enter":
            self.activate()
        elif key == "Escape":
            if self.action_menu.open_menu_id is not None:
                self.action_menu.close()
            else:
                self.close()
        else:
            return False
        return True

    def move_selection(self, delta: int) -> None:
        """Move circularly; an empty list behaves as length 1."""
        size = max(len(self.flat_results), 1)
        self.selected_index = (self.selected_index + delta) % size

    def toggle_actions(self, index: int) -> None:
        """Open or close the action menu of the row at index."""
        flat = self.flat_results
        if 0 <= index < len(flat):
            self.action_menu.toggle(flat[index].id)

    def hover(self, index: int) -> None:
        if 0 <= index < len(self.flat_results):
            self.selected_index = index

    def activate(self, index: int | None = None) -> SearchHit | None:
        """Record the click, navigate to the hit, then close."""
        if index is not None:
            self.hover(index)
        hit = self.selected
        if hit is None:
            return None
        self.controller.track_click(hit)
        self.navigate(hit.redirect_url)
        self.close()
        return hit
