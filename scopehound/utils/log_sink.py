"""Log sink adapter routing diagnostic calls to loguru."""

from __future__ import annotations

from typing import Any

from loguru import logger


def _join(args: tuple[Any, ...]) -> str:
    parts = []
    for arg in args:
        if isinstance(arg, (list, tuple)):
            parts.append("[" + ", ".join(str(a) for a in arg) + "]")
        else:
            parts.append(str(arg))
    return " ".join(parts)


class LoguruLogSink:
    """Joins variadic arguments with spaces and emits them through loguru.

    Formatting failures are swallowed: diagnostics must never break a build
    or a query.
    """

    def info(self, *args: Any) -> None:
        try:
            logger.info(_join(args))
        except Exception:
            pass

    def err(self, *args: Any) -> None:
        try:
            logger.error(_join(args))
        except Exception:
            pass
