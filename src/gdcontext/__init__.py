"""gdcontext public API."""

from __future__ import annotations

from gdcontext.auth import OAuthClient
from gdcontext.config import DEFAULT_CONFIG, ContextConfig
from gdcontext.errors import (
    AuthError,
    GDContextError,
    IOFailureError,
    MalformedRecordError,
    NoContextFoundError,
    NotADirectoryError,
    map_os_error,
)
from gdcontext.models import (
    Context,
    IndexEntry,
    IndexFile,
    Mount,
    MountPoint,
    MountReport,
    SourceResult,
)
from gdcontext.mount import MountBuilder
from gdcontext.probe import PathProbe
from gdcontext.store import ContextStore
from gdcontext.workspace import Workspace

__all__ = [
    # High-level
    "Workspace",
    "ContextStore",
    "MountBuilder",
    "PathProbe",
    "OAuthClient",
    # Config
    "ContextConfig",
    "DEFAULT_CONFIG",
    # Models
    "Context",
    "IndexEntry",
    "IndexFile",
    "Mount",
    "MountPoint",
    "MountReport",
    "SourceResult",
    # Errors
    "GDContextError",
    "NoContextFoundError",
    "NotADirectoryError",
    "IOFailureError",
    "MalformedRecordError",
    "AuthError",
    "map_os_error",
]
