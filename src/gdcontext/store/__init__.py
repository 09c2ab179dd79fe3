"""Public store exports for gdcontext."""

from __future__ import annotations

from .context_store import ContextStore

__all__ = ["ContextStore"]
