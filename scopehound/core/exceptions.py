"""Exception hierarchy for scopehound.

Errors are raised by the component that detects them and handled at the
CscopeService boundary; build() and query() never let them escape.
"""


class ScopeHoundError(Exception):
    """Base class for all scopehound errors."""


class QueueFull(ScopeHoundError):
    """Every build slot holds an unsettled operation; nothing was started."""

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__("queue full")


class LaunchError(ScopeHoundError):
    """The external tool could not be started."""

    def __init__(self, message: str, command: str | None = None):
        self.command = command
        super().__init__(message)


class ProcessError(ScopeHoundError):
    """The external tool exited with a nonzero status.

    The message is the trimmed stderr captured from the process, or the exit
    status when nothing was written to stderr.
    """

    def __init__(self, stderr: str, returncode: int | None = None):
        self.stderr = stderr
        self.returncode = returncode
        super().__init__(stderr or f"exit status {returncode}")


class ProcessTimeout(ProcessError):
    """The external tool ran past the configured timeout and was killed."""

    def __init__(self, timeout: float, stderr: str = ""):
        self.timeout = timeout
        super().__init__(stderr or f"timed out after {timeout}s", returncode=None)


class ParseError(ScopeHoundError):
    """A single output line could not be turned into an Item."""

    def __init__(self, message: str, line: str = ""):
        self.line = line
        super().__init__(message)


class SourceUnavailableError(ParseError):
    """The file referenced by an output line could not be opened."""

    def __init__(self, path: str, line: str = "", reason: str = ""):
        self.path = path
        self.reason = reason
        super().__init__(f'Could not open "{path}".', line=line)


__all__ = [
    "ScopeHoundError",
    "QueueFull",
    "LaunchError",
    "ProcessError",
    "ProcessTimeout",
    "ParseError",
    "SourceUnavailableError",
]
