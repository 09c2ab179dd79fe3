"""Exception hierarchy and OS error mapping for gdcontext."""

from __future__ import annotations

import errno as _errno
from typing import Any, Optional


class GDContextError(Exception):
    """
    Base exception for gdcontext.

    Attributes:
        details: Optional structured information (e.g., path, errno).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class NoContextFoundError(GDContextError):
    """Raised when discovery reaches the filesystem root without a marker directory."""


class NotADirectoryError(GDContextError):
    """Raised when a path that must be a directory is occupied by something else."""


class IOFailureError(GDContextError):
    """Raised for filesystem read/write/stat/mkdir/symlink/remove failures."""


class MalformedRecordError(GDContextError):
    """Raised when a persisted record does not parse into the expected shape."""


class AuthError(GDContextError):
    """Raised when credentials are missing or OAuth authorization/refresh fails."""


def map_os_error(
    exc: OSError,
    *,
    path: str,
    operation: str,
) -> GDContextError:
    """
    Map an OSError to a gdcontext exception.

    Policy:
        - ENOTDIR -> NotADirectoryError
        - otherwise -> IOFailureError
    """
    details: dict[str, Any] = {
        "path": path,
        "operation": operation,
        "errno": exc.errno,
    }
    reason = exc.strerror or str(exc)
    message = f"{operation} failed for {path}: {reason}"

    if exc.errno == _errno.ENOTDIR:
        return NotADirectoryError(message, details=details, cause=exc)
    return IOFailureError(message, details=details, cause=exc)
