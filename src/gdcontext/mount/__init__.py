"""Public mount exports for gdcontext."""

from __future__ import annotations

from .builder import MountBuilder

__all__ = ["MountBuilder"]
