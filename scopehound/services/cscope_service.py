"""Cscope service - builds and queries cscope databases across workspace folders.

# FILE_CONTEXT: Facade over BuildQueue, ProcessRunner and LineParser
# ROLE: Runs one build or query per directory and aggregates the outcomes
# CONCURRENCY: Directories are processed strictly one after another
# ERRORS: Per-directory and per-line failures are logged, never raised
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Callable
from functools import partial
from pathlib import Path
from typing import Any

from scopehound.core.config.cscope_config import CscopeConfig
from scopehound.core.exceptions import ParseError, SourceUnavailableError
from scopehound.core.models.item import Item
from scopehound.core.types.query import QueryKind
from scopehound.interfaces.collaborators import (
    ConfigProvider,
    DirectoryProvider,
    LogSink,
    TextProvider,
)
from scopehound.parsers.line_parser import LineParser
from scopehound.providers.process import ProcessRunner, command_line
from scopehound.providers.text import FileTextProvider
from scopehound.providers.workspace import WorkspaceDirectories
from scopehound.utils.log_sink import LoguruLogSink

from .build_queue import DEFAULT_CAPACITY, BuildQueue


def _split_flags(value: Any) -> list[str]:
    """Turn a configured flag setting into argv elements."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        return [str(part) for part in value]
    return shlex.split(str(value))


class CscopeService:
    """Builds and queries cscope databases for every workspace directory.

    Args:
        config: Config provider answering ``cscope``, ``database``,
            ``buildArgs`` and ``queryArgs`` (and optionally ``timeout`` and
            ``queueCapacity``)
        directories: Provider of the workspace directories and reference root
        log: Diagnostic log sink
        text_provider: Source of file content for highlight resolution
        runner: Process runner; built from the config when omitted
        build_queue: Build scheduler; built from the config when omitted
        on_warning: Receives user-facing warnings such as unreadable files;
            defaults to the log sink's error channel
    """

    def __init__(
        self,
        config: ConfigProvider | None = None,
        directories: DirectoryProvider | None = None,
        log: LogSink | None = None,
        text_provider: TextProvider | None = None,
        runner: ProcessRunner | None = None,
        build_queue: BuildQueue | None = None,
        on_warning: Callable[[str], None] | None = None,
    ) -> None:
        self._config: ConfigProvider = config if config is not None else CscopeConfig()
        self._directories: DirectoryProvider = (
            directories if directories is not None else WorkspaceDirectories([Path.cwd()])
        )
        self._log: LogSink = log if log is not None else LoguruLogSink()
        self._text_provider: TextProvider = (
            text_provider if text_provider is not None else FileTextProvider()
        )
        timeout = self._config.get("timeout")
        self._runner = runner or ProcessRunner(
            self._log, timeout=float(timeout) if timeout else None
        )
        self._build_queue = build_queue or BuildQueue(
            int(self._config.get("queueCapacity") or DEFAULT_CAPACITY)
        )
        self._on_warning = on_warning
        self._build_cmd = ""
        self._query_cmd = ""

    @property
    def build_queue(self) -> BuildQueue:
        return self._build_queue

    @property
    def build_cmd(self) -> str:
        """Command line of the most recently started build."""
        return self._build_cmd

    @property
    def query_cmd(self) -> str:
        """Command line of the most recently started query."""
        return self._query_cmd

    def get_build_cmd(self) -> str:
        return self._build_cmd

    def get_query_cmd(self) -> str:
        return self._query_cmd

    # ----- Build -----

    async def build(self) -> str:
        """Build the database in every directory, in order.

        Returns:
            One line per directory: the tool's stdout, or ``Error: <message>``
        """
        directories = list(self._directories.get_all_directories())
        self._log.info(f"Building cscope databases for {len(directories)} workspace folders...")

        results: list[str] = []
        for directory in directories:
            try:
                result = await self._build_queue.submit(partial(self._build_single, directory))
                results.append(result)
            except Exception as e:
                self._log.err(f"Failed to build database for {directory}:", e)
                results.append(f"Error: {e}")
        return "\n".join(results)

    async def _build_single(self, cwd: Path) -> str:
        self._log.info("start to build")
        command = str(self._config.get("cscope") or "cscope")
        args = [
            *_split_flags(self._config.get("buildArgs")),
            "-f",
            str(self._config.get("database") or ""),
        ]
        self._build_cmd = command_line(command, args)
        try:
            out = await self._runner.invoke(command, args, cwd)
        except Exception:
            self._log.info("done to build: error")
            raise
        self._log.info("done to build: success")
        return out

    # ----- Query -----

    async def query(self, kind: QueryKind | str, word: str) -> list[Item]:
        """Run one query in every directory, in order.

        Returns:
            Items from all directories, directory order first, then output
            order. Directories whose query fails contribute nothing.
        """
        try:
            query_kind = QueryKind.from_name(kind)
        except ValueError as e:
            self._log.err(str(e))
            return []

        directories = list(self._directories.get_all_directories())
        self._log.info(f"Querying across {len(directories)} workspace folders...")

        all_results: list[Item] = []
        for directory in directories:
            try:
                results = await self._query_single(query_kind, word, directory)
                all_results.extend(results)
            except Exception as e:
                self._log.err(f"Failed to query in {directory}:", e)
        return all_results

    async def _query_single(self, kind: QueryKind, word: str, cwd: Path) -> list[Item]:
        command = str(self._config.get("cscope") or "cscope")
        args = [
            *_split_flags(self._config.get("queryArgs")),
            "-f",
            str(self._config.get("database") or ""),
            kind.flag,
            word,
        ]
        label = self._relative_label(cwd)
        self._query_cmd = command_line(command, args)

        parser = LineParser(cwd, self._text_provider)
        results: list[Item] = []

        def on_line(line: str) -> None:
            try:
                item = parser.parse(line, kind, word, label)
            except SourceUnavailableError as e:
                self._warn(str(e))
                return
            except ParseError as e:
                self._log.err(e)
                self._log.err("cannot parse:", line)
                return
            if item is not None:
                results.append(item)

        await self._runner.stream(command, args, cwd, on_line)
        self._log.info(f"results: {len(results)}")
        return results

    # ----- Helpers -----

    def _relative_label(self, directory: Path) -> str:
        current = self._directories.get_current_directory()
        try:
            return os.path.relpath(directory, current)
        except ValueError:
            return str(directory)

    def _warn(self, message: str) -> None:
        if self._on_warning is not None:
            self._on_warning(message)
        else:
            self._log.err(message)
