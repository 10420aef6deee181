"""Process invocation for the external cscope tool."""

from .line_buffer import LineBuffer
from .process_runner import ProcessRunner, command_line

__all__ = ["LineBuffer", "ProcessRunner", "command_line"]
