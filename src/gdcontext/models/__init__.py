"""Public model exports for gdcontext."""

from __future__ import annotations

from .context import Context
from .index import IndexEntry, IndexFile
from .mount import Mount, MountPoint, MountReport, SourceOutcome, SourceResult

__all__ = [
    "Context",
    "IndexEntry",
    "IndexFile",
    "Mount",
    "MountPoint",
    "MountReport",
    "SourceOutcome",
    "SourceResult",
]
