"""scopehound - concurrency-bounded cscope driver for multi-root workspaces."""

from .version import __version__

__all__ = [
    "__version__",
    "CscopeService",
    "Item",
    "QueryKind",
]


def __getattr__(name: str):
    if name == "CscopeService":
        from .services.cscope_service import CscopeService  # lazy

        return CscopeService
    if name == "Item":
        from .core.models.item import Item

        return Item
    if name == "QueryKind":
        from .core.types.query import QueryKind

        return QueryKind
    raise AttributeError(name)
