from .directories import WorkspaceDirectories

__all__ = ["WorkspaceDirectories"]
