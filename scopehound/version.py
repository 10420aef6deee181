"""Version information for scopehound."""

__version__ = "0.3.0"
