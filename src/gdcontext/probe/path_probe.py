"""Stateless path helpers that walk the filesystem hierarchy upward."""

from __future__ import annotations

import os
from typing import Any, Callable

from gdcontext.config import DEFAULT_CONFIG, ContextConfig


class PathProbe:
    """
    Answer existence questions about paths using a configurable separator.

    The lstat function is injectable so the walking logic can be exercised
    against arbitrary separators without touching the real filesystem.
    """

    def __init__(
        self,
        config: ContextConfig = DEFAULT_CONFIG,
        *,
        lstat: Callable[[str], Any] = os.lstat,
    ) -> None:
        self._sep = config.path_separator
        self._lstat = lstat

    @property
    def separator(self) -> str:
        return self._sep

    def exists(self, path: str) -> bool:
        """True iff an entry of any type (dangling links included) is at path."""
        if not path:
            return False
        try:
            self._lstat(path)
        except OSError:
            return False
        return True

    def highest_non_existent_ancestor(self, path: str) -> str:
        """
        Return the topmost directory that must be created to materialize path.

        Walks from path to each parent until an existing entry is found or
        the path runs out. Returns "" if path itself exists.

        Example:
            With only "/" existing, "/work/.gd/mnt" -> "/work".
        """
        last = ""
        current = path
        while current:
            if self.exists(current):
                break
            last = current
            current = self._split_dir(current)
        return self._trim(last)

    def parent(self, path: str) -> str:
        """
        Return the parent of path. The root (and a bare name) is its own parent.
        """
        trimmed = self._trim(path)
        idx = trimmed.rfind(self._sep)
        if idx < 0:
            return trimmed
        if idx == 0:
            return self._sep
        return trimmed[:idx]

    def base_name(self, path: str) -> str:
        """Last element of path, ignoring trailing separators."""
        if not path:
            return "."
        trimmed = path.rstrip(self._sep)
        if not trimmed:
            return self._sep
        return trimmed[trimmed.rfind(self._sep) + 1 :]

    def join(self, *parts: str) -> str:
        """Join non-empty parts with exactly one separator between them."""
        out = ""
        for part in parts:
            if not part:
                continue
            if not out:
                out = part
            elif part.startswith(self._sep):
                out = out.rstrip(self._sep) + part
            else:
                out = out.rstrip(self._sep) + self._sep + part
        return out

    # ----------------------------
    # Internals
    # ----------------------------
    def _split_dir(self, path: str) -> str:
        # Directory part with its trailing separator kept; "" for a bare name.
        trimmed = path.rstrip(self._sep)
        return trimmed[: trimmed.rfind(self._sep) + 1]

    def _trim(self, path: str) -> str:
        trimmed = path.rstrip(self._sep)
        return trimmed if trimmed else path
