"""scopehound CLI commands."""

from .build import build_command
from .query import query_command

__all__ = ["build_command", "query_command"]
