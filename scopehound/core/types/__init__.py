from .query import QueryKind

__all__ = ["QueryKind"]
