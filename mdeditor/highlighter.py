from __future__ import annotations

import logging
import time
from bisect import bisect_left
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_FONT_SIZE, HighlightConfig
from .matcher import match_spans
from .spans import Style, StyledSpan, StyleRun
from .themes import Theme

logger = logging.getLogger(__name__)


def highlight(text: str, theme: Theme, font_size: float = DEFAULT_FONT_SIZE) -> List[StyledSpan]:
    """Return the ordered styled spans for ``text``. Pure; safe to call on every keystroke."""
    return match_spans(text, HighlightConfig(theme=theme, font_size=font_size))


def fold_spans(length: int, spans: Iterable[StyledSpan]) -> List[StyleRun]:
    """
    Lay the spans over each other in order and return contiguous runs of
    resolved style covering [0, length). Each span only overrides the
    attributes it sets.
    """
    if length <= 0:
        return []
    spans = [s for s in spans if min(s.end, length) > max(s.start, 0)]
    bounds = {0, length}
    for s in spans:
        bounds.add(max(s.start, 0))
        bounds.add(min(s.end, length))
    edges = sorted(bounds)
    styles = [Style()] * (len(edges) - 1)
    for s in spans:
        lo = bisect_left(edges, max(s.start, 0))
        hi = bisect_left(edges, min(s.end, length))
        for k in range(lo, hi):
            styles[k] = styles[k].overlay(s.style)

    runs: List[StyleRun] = []
    for k, style in enumerate(styles):
        start, end = edges[k], edges[k + 1]
        if runs and runs[-1].style == style:
            runs[-1] = StyleRun(runs[-1].start, end, style)
        else:
            runs.append(StyleRun(start, end, style))
    return runs


class Highlighter:
    """
    Runs highlight passes for the editor. Holds the current configuration
    and a memo of the last folded pass.
    """

    def __init__(self, config: Optional[HighlightConfig] = None):
        self.config = config or HighlightConfig()
        self._memo: Optional[Tuple[str, HighlightConfig, List[StyleRun]]] = None

    def set_theme(self, name: Optional[str]) -> None:
        self.config = self.config.with_theme(name)

    def set_font_size(self, size: float) -> None:
        self.config = self.config.with_font_size(size)

    def highlight(self, text: str) -> List[StyledSpan]:
        t0 = time.perf_counter()
        spans = match_spans(text, self.config)
        logger.debug(
            "highlight pass: %d chars, %d spans in %.2f ms",
            len(text), len(spans), (time.perf_counter() - t0) * 1000.0,
        )
        return spans

    def resolve(self, text: str) -> List[StyleRun]:
        if self._memo is not None:
            memo_text, memo_config, runs = self._memo
            if memo_config == self.config and memo_text == text:
                return runs
        runs = fold_spans(len(text), self.highlight(text))
        self._memo = (text, self.config, runs)
        return runs
