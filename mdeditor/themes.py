"""
Color palettes for the markdown highlighter.

Themes are plain value records. The registry below is built once at import
and never mutated; lookups by name fall back to the default theme.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_THEME_NAME = "default"

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class ThemeError(ValueError):
    pass


class Construct(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    BLOCKQUOTE = "blockquote"
    BLOCKQUOTE_MARKER = "blockquote_marker"
    TABLE = "table"
    IMAGE = "image"
    IMAGE_MARKER = "image_marker"
    LINK = "link"
    LIST_MARKER = "list_marker"


@dataclass(frozen=True)
class Swatch:
    color: str
    background: Optional[str] = None


@dataclass(frozen=True)
class Theme:
    name: str
    background: str
    text: str
    headers: Tuple[str, ...]
    bold: Swatch
    italic: Swatch
    strikethrough: Swatch
    code: Swatch
    blockquote: Swatch
    blockquote_marker: Swatch
    table: Swatch
    image: Swatch
    image_marker: Swatch
    link: Swatch
    list_marker: Swatch

    def __post_init__(self):
        if not self.headers:
            raise ThemeError(f"Theme {self.name!r} defines no header colors")
        colors = [self.background, self.text, *self.headers]
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Swatch):
                colors.append(value.color)
                if value.background is not None:
                    colors.append(value.background)
        for c in colors:
            if not isinstance(c, str) or not _HEX_COLOR.match(c):
                raise ThemeError(f"Theme {self.name!r} has invalid color {c!r}")

    def header_color(self, level: int) -> str:
        """Color for a header of the given level (1-based), clamped to the palette."""
        idx = min(max(level, 1), len(self.headers)) - 1
        return self.headers[idx]

    def swatch(self, construct: Construct) -> Swatch:
        return getattr(self, Construct(construct).value)


def _make(name: str, background: str, text: str, headers: List[str], **swatches) -> Theme:
    # Swatches are given either as "#color" or ("#color", "#background")
    values = {}
    for key, val in swatches.items():
        if isinstance(val, tuple):
            values[key] = Swatch(*val)
        else:
            values[key] = Swatch(val)
    return Theme(name=name, background=background, text=text, headers=tuple(headers), **values)


_BUILTIN = [
    _make(
        "default", "#ffffff", "#1f2328",
        ["#0a58ca", "#0b63d1", "#1f6feb", "#3b82f6", "#5a8fd8", "#6e7781"],
        bold="#1f2328", italic="#1f2328", strikethrough="#8c959f",
        code=("#cf222e", "#f3f4f6"), blockquote="#6e7781", blockquote_marker="#d97706",
        table="#8250df", image="#0a58ca", image_marker="#cf222e",
        link="#0a58ca", list_marker="#1a7f37",
    ),
    _make(
        "dark", "#1e1e1e", "#d4d4d4",
        ["#569cd6", "#4fc1ff", "#9cdcfe", "#9cdcfe", "#c8c8c8", "#a0a0a0"],
        bold="#ffffff", italic="#dcdcaa", strikethrough="#808080",
        code=("#ce9178", "#2d2d2d"), blockquote="#8a8a8a", blockquote_marker="#d7ba7d",
        table="#c586c0", image="#569cd6", image_marker="#f44747",
        link="#3794ff", list_marker="#6a9955",
    ),
    _make(
        "solarized-light", "#fdf6e3", "#657b83",
        ["#cb4b16", "#b58900", "#859900", "#2aa198", "#268bd2", "#6c71c4"],
        bold="#586e75", italic="#586e75", strikethrough="#93a1a1",
        code=("#dc322f", "#eee8d5"), blockquote="#93a1a1", blockquote_marker="#cb4b16",
        table="#6c71c4", image="#268bd2", image_marker="#dc322f",
        link="#268bd2", list_marker="#859900",
    ),
    _make(
        "solarized-dark", "#002b36", "#839496",
        ["#cb4b16", "#b58900", "#859900", "#2aa198", "#268bd2", "#6c71c4"],
        bold="#93a1a1", italic="#93a1a1", strikethrough="#586e75",
        code=("#dc322f", "#073642"), blockquote="#586e75", blockquote_marker="#cb4b16",
        table="#6c71c4", image="#268bd2", image_marker="#dc322f",
        link="#268bd2", list_marker="#859900",
    ),
    _make(
        "monokai", "#272822", "#f8f8f2",
        ["#f92672", "#fd971f", "#e6db74", "#a6e22e", "#66d9ef", "#ae81ff"],
        bold="#f8f8f2", italic="#e6db74", strikethrough="#75715e",
        code=("#a6e22e", "#3e3d32"), blockquote="#75715e", blockquote_marker="#fd971f",
        table="#ae81ff", image="#66d9ef", image_marker="#f92672",
        link="#66d9ef", list_marker="#a6e22e",
    ),
    _make(
        "dracula", "#282a36", "#f8f8f2",
        ["#bd93f9", "#ff79c6", "#8be9fd", "#50fa7b", "#f1fa8c", "#ffb86c"],
        bold="#ffb86c", italic="#f1fa8c", strikethrough="#6272a4",
        code=("#50fa7b", "#44475a"), blockquote="#6272a4", blockquote_marker="#ff79c6",
        table="#bd93f9", image="#8be9fd", image_marker="#ff5555",
        link="#8be9fd", list_marker="#ff79c6",
    ),
    _make(
        "nord", "#2e3440", "#d8dee9",
        ["#88c0d0", "#81a1c1", "#5e81ac", "#8fbcbb", "#b48ead", "#a3be8c"],
        bold="#eceff4", italic="#ebcb8b", strikethrough="#4c566a",
        code=("#a3be8c", "#3b4252"), blockquote="#616e88", blockquote_marker="#d08770",
        table="#b48ead", image="#88c0d0", image_marker="#bf616a",
        link="#88c0d0", list_marker="#a3be8c",
    ),
    _make(
        "github", "#ffffff", "#24292f",
        ["#24292f", "#24292f", "#24292f", "#57606a", "#57606a", "#6e7781"],
        bold="#24292f", italic="#24292f", strikethrough="#6e7781",
        code=("#0550ae", "#f6f8fa"), blockquote="#57606a", blockquote_marker="#d0d7de",
        table="#8250df", image="#0969da", image_marker="#cf222e",
        link="#0969da", list_marker="#953800",
    ),
    _make(
        "one-dark", "#282c34", "#abb2bf",
        ["#e06c75", "#d19a66", "#e5c07b", "#98c379", "#61afef", "#c678dd"],
        bold="#d19a66", italic="#c678dd", strikethrough="#5c6370",
        code=("#98c379", "#2c313a"), blockquote="#5c6370", blockquote_marker="#e5c07b",
        table="#c678dd", image="#61afef", image_marker="#e06c75",
        link="#61afef", list_marker="#56b6c2",
    ),
    _make(
        "gruvbox", "#282828", "#ebdbb2",
        ["#fb4934", "#fe8019", "#fabd2f", "#b8bb26", "#83a598", "#d3869b"],
        bold="#fbf1c7", italic="#fabd2f", strikethrough="#928374",
        code=("#b8bb26", "#3c3836"), blockquote="#a89984", blockquote_marker="#fe8019",
        table="#d3869b", image="#83a598", image_marker="#fb4934",
        link="#83a598", list_marker="#8ec07c",
    ),
    _make(
        "tokyo-night", "#1a1b26", "#c0caf5",
        ["#7aa2f7", "#7dcfff", "#bb9af7", "#9ece6a", "#e0af68", "#565f89"],
        bold="#bb9af7", italic="#9ece6a", strikethrough="#565f89",
        code=("#7dcfff", "#24283b"), blockquote="#9aa5ce", blockquote_marker="#e0af68",
        table="#bb9af7", image="#9ece6a", image_marker="#f7768e",
        link="#7aa2f7", list_marker="#73daca",
    ),
    _make(
        "rose", "#fff7fb", "#3a2a33",
        ["#db89c8", "#c2649f", "#a8457f", "#8c3a6b", "#733257", "#5c2a46"],
        bold="#3a2a33", italic="#8c3a6b", strikethrough="#a895a0",
        code=("#a8457f", "#fbe9f3"), blockquote="#8a7280", blockquote_marker="#db89c8",
        table="#c2649f", image="#c2649f", image_marker="#db2777",
        link="#b0367f", list_marker="#db89c8",
    ),
    _make(
        "high-contrast", "#000000", "#ffffff",
        ["#ffff00", "#00ffff", "#ff00ff", "#00ff00", "#ffffff"],
        bold="#ffffff", italic="#ffffff", strikethrough="#c0c0c0",
        code=("#00ff00", "#1a1a1a"), blockquote="#c0c0c0", blockquote_marker="#ffff00",
        table="#00ffff", image="#ff00ff", image_marker="#ff0000",
        link="#00ffff", list_marker="#ffff00",
    ),
]

THEMES: Dict[str, Theme] = {t.name: t for t in _BUILTIN}

DEFAULT_THEME = THEMES[DEFAULT_THEME_NAME]


def theme_names() -> List[str]:
    return list(THEMES)


def get_theme(name: Optional[str]) -> Theme:
    theme = THEMES.get(name or "")
    if theme is None:
        logger.warning("Unknown theme %r, falling back to %r", name, DEFAULT_THEME_NAME)
        return DEFAULT_THEME
    return theme
