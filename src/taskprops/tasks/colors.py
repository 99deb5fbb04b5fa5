# src/taskprops/tasks/colors.py

from __future__ import annotations

DEFAULT_COLORS: dict[str, str] = {
    "yellow": "Yellow",
    "blue": "Blue",
    "green": "Green",
    "purple": "Purple",
    "red": "Red",
    "orange": "Orange",
    "grey": "Grey",
    "brown": "Brown",
    "deep_orange": "Deep Orange",
    "dark_grey": "Dark Grey",
    "pink": "Pink",
    "teal": "Teal",
    "cyan": "Cyan",
    "lime": "Lime",
    "light_green": "Light Green",
    "amber": "Amber",
}


class ColorCatalog:
    """Task color palette: ids map to display names."""

    def __init__(self, colors: dict[str, str] | None = None) -> None:
        self._colors = dict(DEFAULT_COLORS if colors is None else colors)

    def find(self, value: str) -> str:
        """
        Return the color id matching `value` by id or display name
        (case-insensitive), or "" when nothing matches.
        """
        needle = value.lower()
        for color_id, name in self._colors.items():
            if needle == color_id or needle == name.lower():
                return color_id
        return ""

    def name(self, color_id: str) -> str:
        return self._colors.get(color_id, "")
