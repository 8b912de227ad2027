"""
Markdown span rules.

Every rule scans the whole text and returns styled spans; the rules run in
a fixed order and later spans win per attribute when they overlap. The
matching is pattern based and intentionally loose, so a few constructs
double-match (italic inside bold, link inside image).
"""
from __future__ import annotations

import re
from typing import Callable, List, Tuple

from .config import HighlightConfig
from .spans import LINE_BREAKS, LineIndex, Style, StyledSpan
from .themes import Construct, Theme

# Beginning of a line: start of text or right after any line break
_BOL = r"(?:^|(?<=[" + LINE_BREAKS + r"]))"
# rest of the current line
_REST = r"[^" + LINE_BREAKS + r"]"

HEADER_RX = re.compile(_BOL + r"(#{1,6})[ \t]+" + _REST + r"*")
BOLD_RX = re.compile(r"\*\*" + _REST + r"*?\*\*")
ITALIC_RX = re.compile(r"\*" + _REST + r"*?\*")
STRIKE_RX = re.compile(r"~~" + _REST + r"*?~~")
INLINE_CODE_RX = re.compile(r"`[^`" + LINE_BREAKS + r"]+`")
FENCE_PREFIX = "```"
BLOCKQUOTE_RX = re.compile(_BOL + r"([ \t]*>+[ \t]?)" + _REST + r"*")
TABLE_SEPARATOR_RX = re.compile(r"[ \t]*\|?[ \t]*[-:]+[ \t]*(?:\|[ \t]*[-:]+[ \t]*)*\|?[ \t]*")
IMAGE_RX = re.compile(r"!\[([^\]" + LINE_BREAKS + r"]*)\]\(([^)" + LINE_BREAKS + r"]+)\)")
LINK_RX = re.compile(r"\[([^\]" + LINE_BREAKS + r"]+)\]\(([^)" + LINE_BREAKS + r"]+)\)")
LIST_RX = re.compile(_BOL + r"([ \t]*)([-*+]|\d+\.)[ \t]+")

Rule = Callable[[str, LineIndex, HighlightConfig], List[StyledSpan]]


def _paint(theme: Theme, construct: Construct, **attrs) -> Style:
    swatch = theme.swatch(construct)
    return Style(foreground=swatch.color, background=swatch.background, **attrs)


def _code_style(cfg: HighlightConfig) -> Style:
    return _paint(cfg.theme, Construct.CODE, monospace=True, size=cfg.font_size - 1)


def header_size(level: int, font_size: float) -> float:
    return max(font_size + 4 - 2 * level, font_size)


def is_table_separator(line: str) -> bool:
    return "|" in line and TABLE_SEPARATOR_RX.fullmatch(line) is not None


def rule_base(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    base = Style(
        monospace=False,
        size=cfg.font_size,
        bold=False,
        italic=False,
        underline=False,
        strikethrough=False,
        foreground=cfg.theme.text,
    )
    return [StyledSpan(0, len(text), base)]


def rule_headers(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    out = []
    for m in HEADER_RX.finditer(text):
        level = len(m.group(1))
        style = Style(
            bold=True,
            size=header_size(level, cfg.font_size),
            foreground=cfg.theme.header_color(level),
        )
        out.append(StyledSpan(m.start(), m.end(), style))
    return out


def _delimited(rx: re.Pattern, style: Style, text: str) -> List[StyledSpan]:
    return [StyledSpan(m.start(), m.end(), style) for m in rx.finditer(text)]


def rule_bold(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    return _delimited(BOLD_RX, _paint(cfg.theme, Construct.BOLD, bold=True), text)


def rule_italic(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    return _delimited(ITALIC_RX, _paint(cfg.theme, Construct.ITALIC, italic=True), text)


def rule_strikethrough(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    style = _paint(cfg.theme, Construct.STRIKETHROUGH, strikethrough=True)
    return _delimited(STRIKE_RX, style, text)


def rule_inline_code(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    return _delimited(INLINE_CODE_RX, _code_style(cfg), text)


def rule_code_blocks(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    out = []
    style = _code_style(cfg)
    open_at = None
    for i in range(len(lines)):
        if not lines.line(i).strip(" \t").startswith(FENCE_PREFIX):
            continue
        if open_at is None:
            open_at = lines.start(i)
        else:
            out.append(StyledSpan(open_at, lines.end(i), style))
            open_at = None
    # an unclosed fence at the end of the text is left unstyled
    return out


def rule_blockquotes(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    out = []
    body = _paint(cfg.theme, Construct.BLOCKQUOTE)
    marker = _paint(cfg.theme, Construct.BLOCKQUOTE_MARKER, bold=True)
    for m in BLOCKQUOTE_RX.finditer(text):
        out.append(StyledSpan(m.start(), m.end(), body))
        out.append(StyledSpan(m.start(1), m.end(1), marker))
    return out


def rule_tables(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    out = []
    table = _paint(cfg.theme, Construct.TABLE, bold=True)
    header_row = Style(bold=True)
    separators = [is_table_separator(lines.line(i)) for i in range(len(lines))]
    for i in range(len(lines)):
        line = lines.line(i)
        if "|" not in line:
            continue
        start, end = lines.start(i), lines.end(i)
        if separators[i]:
            out.append(StyledSpan(start, end, table))
            continue
        for col, ch in enumerate(line):
            if ch == "|":
                out.append(StyledSpan(start + col, start + col + 1, table))
        above = i > 0 and separators[i - 1]
        below = i + 1 < len(lines) and separators[i + 1]
        if above or below:
            out.append(StyledSpan(start, end, header_row))
    return out


def rule_images(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    out = []
    body = _paint(cfg.theme, Construct.IMAGE)
    bang = _paint(cfg.theme, Construct.IMAGE_MARKER, bold=True)
    alt = Style(italic=True)
    for m in IMAGE_RX.finditer(text):
        out.append(StyledSpan(m.start(), m.end(), body))
        out.append(StyledSpan(m.start(), m.start() + 1, bang))
        if m.end(1) > m.start(1):
            out.append(StyledSpan(m.start(1), m.end(1), alt))
    return out


def rule_links(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    return _delimited(LINK_RX, _paint(cfg.theme, Construct.LINK, underline=True), text)


def rule_lists(text: str, lines: LineIndex, cfg: HighlightConfig) -> List[StyledSpan]:
    return _delimited(LIST_RX, _paint(cfg.theme, Construct.LIST_MARKER), text)


RULES: Tuple[Tuple[str, Rule], ...] = (
    ("base", rule_base),
    ("headers", rule_headers),
    ("bold", rule_bold),
    ("italic", rule_italic),
    ("strikethrough", rule_strikethrough),
    ("inline_code", rule_inline_code),
    ("code_blocks", rule_code_blocks),
    ("blockquotes", rule_blockquotes),
    ("tables", rule_tables),
    ("images", rule_images),
    ("links", rule_links),
    ("lists", rule_lists),
)


def match_spans(text: str, config: HighlightConfig) -> List[StyledSpan]:
    """Run every rule over ``text`` and return their spans in application order."""
    lines = LineIndex(text)
    spans: List[StyledSpan] = []
    for _name, rule in RULES:
        spans.extend(rule(text, lines, config))
    return spans
