from __future__ import annotations

from PyQt6.QtGui import QColor

from ..themes import Theme

LIGHT_CHROME = {
    "window": "#ffffff",
    "panel": "#fafafa",
    "panel_fg": "#1f1f1f",
    "line": "#e5e5e5",
    "hover": "#ececec",
    "status": "#ffffff",
    "selected_fg": "#ffffff",
}

DARK_CHROME = {
    "window": "#1f1f1f",
    "panel": "#2a2a2a",
    "panel_fg": "#eaeaea",
    "line": "#333333",
    "hover": "#3a3a3a",
    "status": "#1b1b1b",
    "selected_fg": "#111111",
}

STYLESHEET = """
QWidget {{ font-size: 13px; color: {panel_fg}; }}
QMainWindow {{ background: {window}; }}
QMenuBar {{ background: {panel}; color: {panel_fg}; border-bottom: 1px solid {line}; }}
QMenuBar::item {{ background: transparent; padding: 4px 8px; }}
QMenuBar::item:selected {{ background: {hover}; border-radius: 4px; }}
QMenu {{ background: {panel}; color: {panel_fg}; border: 1px solid {line}; }}
QMenu::item:selected {{ background: {accent}; color: {selected_fg}; }}
QToolBar {{ background: {panel}; border-bottom: 1px solid {line}; }}
QToolBar QToolButton {{ color: {panel_fg}; padding: 6px 8px; }}
QPlainTextEdit, QTextEdit {{ border: none; background: {bg}; color: {fg}; font-size: {size}pt; }}
QStatusBar {{ background: {status}; border-top: 1px solid {line}; color: {panel_fg}; }}
"""


def is_dark(theme: Theme) -> bool:
    return QColor(theme.background).lightness() < 128


def build_css(theme: Theme, font_size: float) -> str:
    """Window stylesheet: editor colors from the theme, chrome from its lightness."""
    chrome = DARK_CHROME if is_dark(theme) else LIGHT_CHROME
    return STYLESHEET.format(
        bg=theme.background,
        fg=theme.text,
        accent=theme.link.color,
        size=f"{font_size:g}",
        **chrome,
    )


def apply_theme(window, theme: Theme, font_size: float) -> None:
    window.setStyleSheet(build_css(theme, font_size))
