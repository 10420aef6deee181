"""Argument parsers for scopehound CLI commands."""

from .build_parser import add_build_subparser
from .query_parser import add_query_subparser

__all__ = ["add_build_subparser", "add_query_subparser"]
