"""
Markdown Editor core package.

Exposes the highlighting engine and theme registry used by the GUI app.
"""

__all__ = [
    "DEFAULT_THEME",
    "HighlightConfig",
    "Highlighter",
    "Style",
    "StyleRun",
    "StyledSpan",
    "THEMES",
    "Theme",
    "ThemeError",
    "fold_spans",
    "get_theme",
    "highlight",
    "match_spans",
    "theme_names",
]

from .config import HighlightConfig  # noqa: E402
from .highlighter import Highlighter, fold_spans, highlight  # noqa: E402
from .matcher import match_spans  # noqa: E402
from .spans import Style, StyledSpan, StyleRun  # noqa: E402
from .themes import DEFAULT_THEME, THEMES, Theme, ThemeError, get_theme, theme_names  # noqa: E402
