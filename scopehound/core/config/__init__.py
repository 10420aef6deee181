"""Configuration models for scopehound."""

from .cscope_config import CscopeConfig

__all__ = ["CscopeConfig"]
