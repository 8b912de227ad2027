from __future__ import annotations

from dataclasses import dataclass, replace

from .themes import DEFAULT_THEME, Theme, get_theme

DEFAULT_FONT_SIZE = 14
MIN_FONT_SIZE = 6
MAX_FONT_SIZE = 72


def clamp_font_size(size: float) -> float:
    return max(MIN_FONT_SIZE, min(MAX_FONT_SIZE, size))


@dataclass(frozen=True)
class HighlightConfig:
    """Everything a highlight pass depends on besides the text itself."""
    theme: Theme = DEFAULT_THEME
    font_size: float = DEFAULT_FONT_SIZE

    @classmethod
    def from_names(cls, theme_name: str | None, font_size: float = DEFAULT_FONT_SIZE) -> "HighlightConfig":
        return cls(theme=get_theme(theme_name), font_size=clamp_font_size(font_size))

    def with_theme(self, name: str | None) -> "HighlightConfig":
        return replace(self, theme=get_theme(name))

    def with_font_size(self, size: float) -> "HighlightConfig":
        return replace(self, font_size=clamp_font_size(size))
