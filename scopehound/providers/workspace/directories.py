"""Static workspace directory provider."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path


class WorkspaceDirectories:
    """Fixed, ordered set of workspace directories.

    Directories are made absolute (not resolved, so symlinked workspaces keep
    the path the user gave). Duplicates are dropped, keeping the first
    occurrence.
    """

    def __init__(
        self, directories: Iterable[str | Path], current: str | Path | None = None
    ) -> None:
        seen: set[Path] = set()
        self._directories: list[Path] = []
        for directory in directories:
            path = Path(directory).absolute()
            if path not in seen:
                seen.add(path)
                self._directories.append(path)
        if current is not None:
            self._current = Path(current).absolute()
        elif self._directories:
            self._current = self._directories[0]
        else:
            self._current = Path.cwd()

    def get_all_directories(self) -> list[Path]:
        return list(self._directories)

    def get_current_directory(self) -> Path:
        return self._current

    def __len__(self) -> int:
        return len(self._directories)

    def __repr__(self) -> str:
        return f"WorkspaceDirectories({[str(d) for d in self._directories]}, current={self._current})"
