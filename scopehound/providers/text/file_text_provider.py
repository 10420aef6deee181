"""Disk-backed text provider used to resolve highlight ranges."""

from __future__ import annotations

from pathlib import Path

from loguru import logger


class FileTextProvider:
    """Reads source files as lists of lines.

    Files are decoded as UTF-8 with replacement characters for invalid bytes.
    Results are cached per path and reused while the file's mtime and size are
    unchanged, since one query usually yields many hits in the same file.
    """

    def __init__(self, encoding: str = "utf-8", max_entries: int = 256) -> None:
        self._encoding = encoding
        self._max_entries = max_entries
        self._cache: dict[str, tuple[int, int, list[str]]] = {}

    def open(self, path: Path) -> list[str]:
        """Return the lines of ``path`` without terminators.

        Raises:
            OSError: If the file does not exist or cannot be read
        """
        key = str(path)
        stat = Path(path).stat()
        cached = self._cache.get(key)
        if cached is not None and cached[0] == stat.st_mtime_ns and cached[1] == stat.st_size:
            return cached[2]

        data = Path(path).read_bytes()
        lines = data.decode(self._encoding, errors="replace").splitlines()

        if len(self._cache) >= self._max_entries:
            # Drop the oldest entry (dicts keep insertion order)
            self._cache.pop(next(iter(self._cache)))
        self._cache[key] = (stat.st_mtime_ns, stat.st_size, lines)
        logger.debug(f"Loaded {len(lines)} lines from {key}")
        return lines

    def clear(self) -> None:
        self._cache.clear()
