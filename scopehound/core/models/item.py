"""Structured result of a single cscope query line."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class Item:
    """One query result, positioned for display.

    Attributes:
        file: Absolute path of the file holding the match
        symbol: Symbol (or enclosing function) name reported by cscope
        line: Zero-based line number
        column: Start column of the highlight within the line
        length: Highlight length; 0 together with column 0 when the
            searched text could not be located in the line
        rest: Remainder of the cscope line (usually the source text)
        label: Workspace directory relative to the reference root
        text: Resolved content of the target line, "" if unavailable
    """

    file: Path
    symbol: str
    line: int
    column: int
    length: int
    rest: str
    label: str
    text: str = ""

    @property
    def end_column(self) -> int:
        return self.column + self.length

    @property
    def highlighted(self) -> bool:
        return self.length > 0

    @property
    def title(self) -> str:
        """Short one-line summary: ``symbol : rest``."""
        return f"{self.symbol} : {self.rest}"

    def location(self, root: Path | str | None = None) -> str:
        """``path:line:column`` for display, with the path shown relative to ``root``.

        Line and column are 1-based here, as editors and compilers print them;
        the ``line`` and ``column`` fields stay 0-based.
        """
        shown = str(self.file)
        if root:
            try:
                shown = os.path.relpath(self.file, root)
            except ValueError:
                # Different drive on Windows
                pass
        return f"{shown}:{self.line + 1}:{self.column + 1}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": str(self.file),
            "symbol": self.symbol,
            "line": self.line,
            "column": self.column,
            "length": self.length,
            "rest": self.rest,
            "label": self.label,
            "text": self.text,
        }
