"""Public error exports for gdcontext."""

from __future__ import annotations

from .exceptions import (
    AuthError,
    GDContextError,
    IOFailureError,
    MalformedRecordError,
    NoContextFoundError,
    NotADirectoryError,
    map_os_error,
)

__all__ = [
    "GDContextError",
    "NoContextFoundError",
    "NotADirectoryError",
    "IOFailureError",
    "MalformedRecordError",
    "AuthError",
    "map_os_error",
]
