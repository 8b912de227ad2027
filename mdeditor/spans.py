from __future__ import annotations

import re
from dataclasses import dataclass, fields, replace
from typing import List, Optional

# every character str.splitlines() ends a line on; usable inside [...]
LINE_BREAKS = r"\n\r\x0b\x0c\x1c-\x1e\x85\u2028\u2029"

_LINE_BREAK = re.compile(r"\r\n|[" + LINE_BREAKS + r"]")


@dataclass(frozen=True)
class Style:
    """
    A set of text attributes. Fields left as None are not touched when the
    style is laid over another one.
    """
    monospace: Optional[bool] = None
    size: Optional[float] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underline: Optional[bool] = None
    strikethrough: Optional[bool] = None
    foreground: Optional[str] = None
    background: Optional[str] = None

    def overlay(self, patch: "Style") -> "Style":
        changes = {}
        for f in fields(patch):
            value = getattr(patch, f.name)
            if value is not None:
                changes[f.name] = value
        if not changes:
            return self
        return replace(self, **changes)


@dataclass(frozen=True)
class StyledSpan:
    start: int
    end: int
    style: Style


@dataclass(frozen=True)
class StyleRun:
    start: int
    end: int
    style: Style


class LineIndex:
    """Start/end offsets of every line in a text, computed once per pass."""

    def __init__(self, text: str):
        self.text = text
        self._starts: List[int] = [0]
        self._ends: List[int] = []
        for m in _LINE_BREAK.finditer(text):
            self._ends.append(m.start())
            self._starts.append(m.end())
        self._ends.append(len(text))

    def __len__(self) -> int:
        return len(self._starts)

    def start(self, i: int) -> int:
        return self._starts[i]

    def end(self, i: int) -> int:
        # end of the line content, excluding its terminator
        return self._ends[i]

    def line(self, i: int) -> str:
        return self.text[self._starts[i]:self._ends[i]]
