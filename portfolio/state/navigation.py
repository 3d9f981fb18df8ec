from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NavItem:
    id: str
    label: str

    @property
    def anchor(self) -> str:
        return f"#{self.id}"


NAV_ITEMS = [
    NavItem("about", "About"),
    NavItem("stack", "Tech"),
    NavItem("projects", "Projects"),
    NavItem("xp", "Experience"),
    NavItem("blog", "Insights"),
]


class NavMenu:
    """Narrow-viewport menu: collapsed until toggled, closes on selection."""

    def __init__(self, expanded: bool = False):
        self.expanded = expanded

    def toggle(self) -> bool:
        self.expanded = not self.expanded
        return self.expanded

    def close(self) -> None:
        self.expanded = False

    def select(self, item_id: str) -> Optional[str]:
        self.close()
        for item in NAV_ITEMS:
            if item.id == item_id:
                return item.anchor
        return None


class ScrollVisibility:
    """
    Nav bar shown while the latest scroll delta is upward or zero, hidden on
    any downward movement (no threshold).
    """

    def __init__(self, last_y: float = 0):
        self.last_y = last_y
        self.shown = True

    def on_scroll(self, y: float) -> bool:
        self.shown = y <= self.last_y
        self.last_y = y
        return self.shown
