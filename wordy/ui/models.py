"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class CategoryState:
    """Home screen entry: a category and how far the player got in it."""

    category: str
    level: int
    total_levels: int

    @property
    def playable(self) -> bool:
        return self.total_levels > 0

    @property
    def label(self) -> str:
        if not self.playable:
            return f"{self.category} (no levels)"
        shown = min(self.level, self.total_levels)
        return f"{self.category} - Level {shown}/{self.total_levels}"
