"""Interfaces for the collaborators CscopeService consumes.

Concrete defaults live in scopehound.providers and scopehound.utils; any
object with matching methods can be passed instead (editor integrations,
tests).
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConfigProvider(Protocol):
    """Key/value access to tool settings.

    Must never raise for a missing key; absence is reported as an empty value.
    """

    def get(self, key: str) -> Any: ...


@runtime_checkable
class DirectoryProvider(Protocol):
    """Source of workspace directories."""

    def get_all_directories(self) -> Sequence[Path]:
        """Ordered list of directories to build and query."""
        ...

    def get_current_directory(self) -> Path:
        """Reference root used to label results."""
        ...


@runtime_checkable
class LogSink(Protocol):
    """Variadic diagnostic sink. Implementations must not raise."""

    def info(self, *args: Any) -> None: ...

    def err(self, *args: Any) -> None: ...


@runtime_checkable
class TextProvider(Protocol):
    """Access to source file content, by line."""

    def open(self, path: Path) -> Sequence[str]:
        """Return the lines of ``path``.

        Raises:
            OSError: If the file does not exist or cannot be read
        """
        ...
