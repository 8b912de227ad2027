from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Dict, List, Optional, Tuple

from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextDocument

from ..config import HighlightConfig
from ..highlighter import Highlighter
from ..spans import Style, StyleRun
from ..utils import utf16_positions

MONOSPACE_FAMILY = "Monospace"


def char_format(style: Style) -> QTextCharFormat:
    fmt = QTextCharFormat()
    if style.foreground:
        fmt.setForeground(QColor(style.foreground))
    if style.background:
        fmt.setBackground(QColor(style.background))
    if style.bold is not None:
        fmt.setFontWeight(QFont.Weight.Bold if style.bold else QFont.Weight.Normal)
    if style.italic is not None:
        fmt.setFontItalic(style.italic)
    if style.underline is not None:
        fmt.setFontUnderline(style.underline)
    if style.strikethrough is not None:
        fmt.setFontStrikeOut(style.strikethrough)
    if style.size:
        fmt.setFontPointSize(float(style.size))
    if style.monospace:
        fmt.setFontFamilies([MONOSPACE_FAMILY])
        fmt.setFontFixedPitch(True)
    return fmt


class MarkdownHighlighter(QSyntaxHighlighter):
    """
    Paints highlight passes onto a QTextDocument.

    A pass covers the whole document, so it is computed once per edit and
    sliced per block. Edits can restyle blocks before the edited one (e.g.
    closing a code fence), so every edit also queues one full rehighlight.
    """

    def __init__(self, document: QTextDocument | None = None, config: HighlightConfig | None = None):
        # Attach the document after connecting our own contentsChange slot so
        # the cached pass is dropped before Qt re-formats the edited blocks.
        super().__init__(None)
        self.engine = Highlighter(config)
        self._pass: Optional[Tuple[List[StyleRun], List[int], List[int]]] = None
        self._formats: Dict[Style, QTextCharFormat] = {}
        self._connected_doc: Optional[QTextDocument] = None
        self._pending = QTimer(self)
        self._pending.setSingleShot(True)
        self._pending.setInterval(0)
        self._pending.timeout.connect(self.rehighlight)
        if document is not None:
            self.setDocument(document)

    @property
    def config(self) -> HighlightConfig:
        return self.engine.config

    def setDocument(self, doc: QTextDocument | None):
        if self._connected_doc is not None:
            self._connected_doc.contentsChange.disconnect(self._on_contents_change)
            self._connected_doc = None
        self._pass = None
        if doc is not None:
            doc.contentsChange.connect(self._on_contents_change)
            self._connected_doc = doc
        super().setDocument(doc)

    def set_theme(self, name: str | None):
        self.engine.set_theme(name)
        self._invalidate()
        self.rehighlight()

    def set_font_size(self, size: float):
        self.engine.set_font_size(size)
        self._invalidate()
        self.rehighlight()

    def _invalidate(self):
        self._pass = None
        self._formats.clear()

    def _on_contents_change(self, position: int, removed: int, added: int):
        if removed == 0 and added == 0:
            return
        self._pass = None
        if not self._pending.isActive():
            self._pending.start()

    def _current_pass(self) -> Tuple[List[StyleRun], List[int], List[int]]:
        if self._pass is None:
            text = self.document().toPlainText()
            runs = self.engine.resolve(text)
            self._pass = (runs, [r.start for r in runs], utf16_positions(text))
        return self._pass

    def _format(self, style: Style) -> QTextCharFormat:
        fmt = self._formats.get(style)
        if fmt is None:
            fmt = char_format(style)
            self._formats[style] = fmt
        return fmt

    def highlightBlock(self, text: str):
        runs, run_starts, doc_positions = self._current_pass()
        if not runs:
            return
        # block positions are UTF-16 offsets; runs use code point offsets
        start = bisect_left(doc_positions, self.currentBlock().position())
        end = start + len(text)
        local = utf16_positions(text)
        i = max(0, bisect_right(run_starts, start) - 1)
        while i < len(runs) and runs[i].start < end:
            run = runs[i]
            a = max(run.start, start) - start
            b = min(run.end, end) - start
            if b > a:
                self.setFormat(local[a], local[b] - local[a], self._format(run.style))
            i += 1
