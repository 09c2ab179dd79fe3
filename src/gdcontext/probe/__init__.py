"""Public path probe exports for gdcontext."""

from __future__ import annotations

from .path_probe import PathProbe

__all__ = ["PathProbe"]
