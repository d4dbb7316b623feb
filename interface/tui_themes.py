#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict

from prompt_toolkit.styles import Style


THEMES: Dict[str, Dict[str, str]] = {
    "catppuccin": {
        "": "#cad3f5",  # no forced background
        "text": "#cad3f5",
        "text.dim": "#6e738d",
        "text.done": "#494d64 strike",
        "selected": "bg:#494d64 #cad3f5",
        "multi": "#eed49f",
        "match": "#eed49f bold",
        "caret": "#b7bdf8 bold",
        "frame.border": "#6e738d",
        "frame.title": "bg:#b7bdf8 #181926 bold",
        "frame.title.inactive": "bg:#6e738d #24273a",
        "frame.border.active": "#b7bdf8",
        "icon.pending": "#eed49f",
        "icon.done": "#a6da95",
        "progress": "#a6da95",
        "urgency.0": "#a6da95",
        "urgency.1": "#eed49f",
        "urgency.2": "#c6a0f6",
        "urgency.3": "#ed8796 bold",
        "footer.mode": "bg:#a6da95 #181926 bold",
        "footer.edit": "bg:#eed49f #181926 bold",
        "footer.sort": "bg:#8aadf4 #181926 bold",
        "footer.search": "bg:#8aadf4 #181926 bold",
        "footer.hint": "#6e738d",
        "error": "#ed8796 bold",
    },
    "dark-olive": {
        "": "#d7dfe6",
        "text": "#d7dfe6",
        "text.dim": "#97a0a9",
        "text.done": "#6d717a strike",
        "selected": "bg:#3b3b3b #d7dfe6 bold",  # soft grey highlight
        "multi": "#e5c07b",
        "match": "#f9ac60 bold",
        "caret": "#ffb347 bold",
        "frame.border": "#4b525a",
        "frame.title": "bg:#ffb347 #1c1c1c bold",
        "frame.title.inactive": "bg:#4b525a #d7dfe6",
        "frame.border.active": "#ffb347",
        "icon.pending": "#e5c07b",
        "icon.done": "#9ad974",
        "progress": "#9ad974",
        "urgency.0": "#9ad974",
        "urgency.1": "#e5c07b",
        "urgency.2": "#c678dd",
        "urgency.3": "#e06c75 bold",
        "footer.mode": "bg:#9ad974 #1c1c1c bold",
        "footer.edit": "bg:#e5c07b #1c1c1c bold",
        "footer.sort": "bg:#61afef #1c1c1c bold",
        "footer.search": "bg:#61afef #1c1c1c bold",
        "footer.hint": "#6d717a",
        "error": "#ff5156 bold",
    },
}

DEFAULT_THEME = "catppuccin"


def get_theme_palette(theme: str) -> Dict[str, str]:
    """Get theme palette, falling back to default if theme not found."""
    base = THEMES.get(theme)
    if not base:
        base = THEMES[DEFAULT_THEME]
    return dict(base)


def build_style(theme: str) -> Style:
    """Build Style object from theme name."""
    palette = get_theme_palette(theme)
    return Style.from_dict(palette)
