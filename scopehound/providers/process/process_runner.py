"""Subprocess wrapper for cscope invocations.

Runs one external command per call with asyncio, capturing stdout and stderr
concurrently. Success and failure are keyed on the exit code only; whatever
was captured is logged either way.
"""

from __future__ import annotations

import asyncio
import codecs
from collections.abc import Callable, Sequence
from pathlib import Path

from loguru import logger

from scopehound.core.exceptions import LaunchError, ProcessError, ProcessTimeout
from scopehound.interfaces.collaborators import LogSink
from scopehound.utils.log_sink import LoguruLogSink

from .line_buffer import LineBuffer


def command_line(command: str, args: Sequence[str]) -> str:
    """Space-joined command line, as shown in diagnostics."""
    return " ".join([command, *args])


class ProcessRunner:
    """Spawns an external tool and reports its captured output.

    Notes
    - No timeout is applied unless one is configured; a launched process
      otherwise runs to completion.
    - Output is decoded incrementally, so chunk boundaries never need to line
      up with character or line boundaries.
    """

    READ_CHUNK_SIZE = 64 * 1024

    def __init__(
        self,
        log: LogSink | None = None,
        timeout: float | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._log = log if log is not None else LoguruLogSink()
        self._timeout = timeout
        self._encoding = encoding

    @property
    def timeout(self) -> float | None:
        return self._timeout

    async def invoke(
        self, command: str, args: Sequence[str], cwd: str | Path
    ) -> str:
        """Run ``command`` in ``cwd`` and return its trimmed stdout.

        Raises:
            LaunchError: If the process could not be started
            ProcessError: If the process exited with a nonzero status
            ProcessTimeout: If a timeout is configured and was exceeded
        """
        return await self._run(command, args, cwd, on_line=None)

    async def stream(
        self,
        command: str,
        args: Sequence[str],
        cwd: str | Path,
        on_line: Callable[[str], None],
    ) -> str:
        """Like invoke(), but hands each complete stdout line to ``on_line``.

        Lines are delivered as soon as they arrive; the full stdout is still
        accumulated for logging and returned trimmed on success. Exceptions
        raised by ``on_line`` kill the process and propagate.
        """
        return await self._run(command, args, cwd, on_line=on_line)

    async def _run(
        self,
        command: str,
        args: Sequence[str],
        cwd: str | Path,
        on_line: Callable[[str], None] | None,
    ) -> str:
        argv = [str(arg) for arg in args]
        self._log.info(command, argv, str(cwd))

        try:
            proc = await asyncio.create_subprocess_exec(
                command,
                *argv,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except (OSError, ValueError) as e:
            self._log.err("error:", e)
            raise LaunchError(str(e).strip(), command=command) from e

        assert proc.stdout is not None and proc.stderr is not None

        if on_line is not None:
            buffer = LineBuffer(on_line, self._encoding)
            out_feed, out_close = buffer.feed, buffer.close
        else:
            out_decoder = codecs.getincrementaldecoder(self._encoding)(errors="replace")
            out_feed = out_decoder.decode

            def out_close() -> str:
                return out_decoder.decode(b"", final=True)

        err_decoder = codecs.getincrementaldecoder(self._encoding)(errors="replace")

        def err_close() -> str:
            return err_decoder.decode(b"", final=True)

        communicate = asyncio.gather(
            self._drain(proc.stdout, out_feed, out_close),
            self._drain(proc.stderr, err_decoder.decode, err_close),
            proc.wait(),
        )
        try:
            if self._timeout is None:
                out, err, code = await communicate
            else:
                out, err, code = await asyncio.wait_for(communicate, timeout=self._timeout)
        except asyncio.TimeoutError as e:
            await self._kill(proc)
            self._log.err(f"{command_line(command, argv)} timed out after {self._timeout}s")
            raise ProcessTimeout(self._timeout) from e
        except asyncio.CancelledError:
            if proc.returncode is None:
                try:
                    proc.kill()
                except ProcessLookupError:
                    pass
            raise
        except Exception:
            await self._kill(proc)
            raise

        if err:
            self._log.err(f"stderr: {code}\n{err}")
        self._log.info(f"stdout: {code}\n{out}")

        if code != 0:
            raise ProcessError(err.strip(), returncode=code)
        return out.strip()

    async def _drain(
        self,
        stream: asyncio.StreamReader,
        feed: Callable[[bytes], str],
        close: Callable[[], str],
    ) -> str:
        parts: list[str] = []
        while True:
            chunk = await stream.read(self.READ_CHUNK_SIZE)
            if not chunk:
                break
            parts.append(feed(chunk))
        parts.append(close())
        return "".join(parts)

    @staticmethod
    async def _kill(proc: asyncio.subprocess.Process) -> None:
        if proc.returncode is None:
            try:
                proc.kill()
            except ProcessLookupError:
                pass
            await proc.wait()
        logger.debug(f"Reaped process {proc.pid} (exit {proc.returncode})")
