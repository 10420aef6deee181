"""Providers package for scopehound - default collaborator implementations.

Use lazy import so importing one provider does not pull in the others.
"""

__all__ = [
    "FileTextProvider",
    "ProcessRunner",
    "WorkspaceDirectories",
]


def __getattr__(name: str):
    if name == "FileTextProvider":
        from .text import FileTextProvider  # lazy

        return FileTextProvider
    if name == "ProcessRunner":
        from .process import ProcessRunner  # lazy

        return ProcessRunner
    if name == "WorkspaceDirectories":
        from .workspace import WorkspaceDirectories  # lazy

        return WorkspaceDirectories
    raise AttributeError(name)
