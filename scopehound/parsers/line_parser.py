"""Parser for cscope's line-oriented (-L) query output.

Each result line has the form::

    <file> <symbol> <line number> <rest of line>

Fields are split on the first three whitespace characters, so the remainder
may itself contain whitespace. File names containing whitespace cannot be
told apart from the field separators; cscope offers no escaping, and such
lines parse incorrectly.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

from scopehound.core.exceptions import ParseError, SourceUnavailableError
from scopehound.core.models.item import Item
from scopehound.core.types.query import QueryKind
from scopehound.interfaces.collaborators import TextProvider

# Shorter lines are noise (blank lines, stray terminators), not results
MIN_LINE_LENGTH = 3

_SEPARATOR = re.compile(r"\s")


def split_fields(raw_line: str) -> tuple[str, str, str, str]:
    """Split a result line into (file, symbol, line number, rest).

    Raises:
        ParseError: If fewer than three separators are present
    """
    separators: list[int] = []
    for match in _SEPARATOR.finditer(raw_line):
        separators.append(match.start())
        if len(separators) == 3:
            break
    if len(separators) < 3:
        raise ParseError(
            f"Expected 4 fields, found {len(separators) + 1}", line=raw_line
        )
    first, second, third = separators
    return (
        raw_line[:first],
        raw_line[first + 1 : second],
        raw_line[second + 1 : third],
        raw_line[third + 1 :],
    )


def find_highlight(text: str, needle: str, regex: bool = False) -> tuple[int, int]:
    """Locate ``needle`` in ``text`` and return (column, length).

    Returns (0, 0) when the needle is empty or absent. With ``regex`` the
    needle is tried as a regular expression first and matched literally if it
    does not compile.
    """
    if not text or not needle:
        return 0, 0
    if regex:
        try:
            match = re.search(needle, text)
        except re.error:
            match = None
        else:
            if match is None or match.end() == match.start():
                return 0, 0
            return match.start(), match.end() - match.start()
    column = text.find(needle)
    if column < 0:
        return 0, 0
    return column, len(needle)


class LineParser:
    """Builds Items from cscope result lines for one workspace directory.

    Args:
        root: Directory that relative file names are resolved against
        text_provider: Source of file content used for highlight resolution
    """

    def __init__(self, root: str | Path, text_provider: TextProvider) -> None:
        self._root = Path(root)
        self._text_provider = text_provider

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, file_name: str) -> Path:
        """Absolute path for a file name reported by cscope."""
        if os.path.isabs(file_name):
            return Path(file_name)
        return Path(os.path.normpath(os.path.join(self._root, file_name)))

    def parse(
        self, raw_line: str, kind: QueryKind, pattern: str, label: str
    ) -> Item | None:
        """Parse one output line.

        Returns:
            The Item, or None for lines too short to be a result

        Raises:
            ParseError: If the line cannot be split or the line number is not
                an integer
            SourceUnavailableError: If the referenced file cannot be read
        """
        if len(raw_line) < MIN_LINE_LENGTH:
            return None

        file_name, symbol, number, rest = split_fields(raw_line)
        if not file_name:
            raise ParseError("Missing file name", line=raw_line)
        if not number.isdecimal():
            raise ParseError(f"Invalid line number: {number!r}", line=raw_line)
        line = int(number) - 1
        path = self.resolve(file_name)

        try:
            lines = self._text_provider.open(path)
        except (OSError, UnicodeError) as e:
            raise SourceUnavailableError(str(path), line=raw_line, reason=str(e)) from e

        # A stale database can point past the end of the file; keep the item
        text = lines[line] if 0 <= line < len(lines) else ""
        needle = symbol if kind is QueryKind.CALLEE else pattern
        column, length = find_highlight(text, needle, regex=kind.is_regex)

        return Item(
            file=path,
            symbol=symbol,
            line=line,
            column=column,
            length=length,
            rest=rest,
            label=label,
            text=text,
        )
