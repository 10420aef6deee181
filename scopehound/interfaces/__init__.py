"""Collaborator interfaces for scopehound."""

from .collaborators import ConfigProvider, DirectoryProvider, LogSink, TextProvider

__all__ = ["ConfigProvider", "DirectoryProvider", "LogSink", "TextProvider"]
