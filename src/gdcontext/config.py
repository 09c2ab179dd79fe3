"""Configuration for gdcontext path handling and record layout."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class ContextConfig:
    """
    Settings threaded into PathProbe, ContextStore and MountBuilder.

    Attributes:
        marker_dir: Name of the subdirectory that identifies a context root.
        path_separator: Separator used when walking paths upward.
        hidden_prefix: Base-name prefix of hidden entries.
        credentials_file: Credentials record name under the marker directory.
        indices_file: Index cache record name under the marker directory.
        dir_mode: Mode for directories created by this package.
        record_mode: Mode for records (owner-only, they hold a secret).
    """

    marker_dir: str = ".gd"
    path_separator: str = os.sep
    hidden_prefix: str = "."
    credentials_file: str = "credentials.json"
    indices_file: str = "indices"
    dir_mode: int = 0o755
    record_mode: int = 0o600

    def __post_init__(self) -> None:
        if not isinstance(self.path_separator, str) or len(self.path_separator) != 1:
            raise ValueError("ContextConfig.path_separator must be a single character")

        for key in ("marker_dir", "credentials_file", "indices_file"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"ContextConfig.{key} must be a non-empty string")
            if self.path_separator in value:
                raise ValueError(f"ContextConfig.{key} must not contain the path separator")

        if not isinstance(self.hidden_prefix, str) or not self.hidden_prefix:
            raise ValueError("ContextConfig.hidden_prefix must be a non-empty string")


DEFAULT_CONFIG = ContextConfig()
