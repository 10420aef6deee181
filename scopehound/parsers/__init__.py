"""Parsers for cscope output."""

from .line_parser import MIN_LINE_LENGTH, LineParser, find_highlight, split_fields

__all__ = ["MIN_LINE_LENGTH", "LineParser", "find_highlight", "split_fields"]
