"""ContextStore: context discovery, initialization and record persistence."""

from __future__ import annotations

import os
import stat
from typing import Optional

from loguru import logger

from gdcontext.config import DEFAULT_CONFIG, ContextConfig
from gdcontext.errors import (
    MalformedRecordError,
    NoContextFoundError,
    NotADirectoryError,
    map_os_error,
)
from gdcontext.models import Context, IndexFile
from gdcontext.probe import PathProbe

from .records import load_record, store_record


class ContextStore:
    """
    Locate context roots and load/store the records kept under their marker
    directory.

    Layout (relative to a context root R):
        R/<marker_dir>/<credentials_file>
        R/<marker_dir>/<indices_file>
    """

    def __init__(
        self,
        config: ContextConfig = DEFAULT_CONFIG,
        *,
        probe: Optional[PathProbe] = None,
    ) -> None:
        self._config = config
        self._probe = probe if probe is not None else PathProbe(config)

    @property
    def config(self) -> ContextConfig:
        return self._config

    # ----------------------------
    # Layout
    # ----------------------------
    def marker_path(self, root: str) -> str:
        return self._probe.join(root, self._config.marker_dir)

    def credentials_path(self, root: str) -> str:
        return self._probe.join(self.marker_path(root), self._config.credentials_file)

    def indices_path(self, root: str) -> str:
        return self._probe.join(self.marker_path(root), self._config.indices_file)

    # ----------------------------
    # Discovery / initialization
    # ----------------------------
    def discover(self, start_path: str) -> Context:
        """
        Walk upward from start_path looking for the marker directory.

        Raises:
            NoContextFoundError: if the filesystem root is reached without a match.
            IOFailureError / MalformedRecordError: if the credentials record
                of the found context cannot be loaded.
        """
        p = start_path
        while True:
            if self._is_dir(self.marker_path(p)):
                break
            parent = self._probe.parent(p)
            if parent == p:
                raise NoContextFoundError(
                    f"No {self._config.marker_dir} context found; initialize one first",
                    details={"start_path": start_path},
                )
            p = parent

        logger.debug(f"Discovered context root {p} from {start_path}")
        return self.read(Context(abs_path=p))

    def initialize(self, abs_path: str) -> tuple[str, bool, Context]:
        """
        Create (or reuse) the marker directory at abs_path and write an
        empty-credential record.

        Returns:
            (marker_path, first_init, context); first_init is True exactly
            when the marker did not exist before.

        Raises:
            NotADirectoryError: if the marker path exists but is not a directory.
            IOFailureError: on stat errors other than absence, or mkdir/write failures.
        """
        marker = self.marker_path(abs_path)
        first_init = False
        try:
            st = os.stat(marker)
        except FileNotFoundError:
            first_init = True
        except OSError as exc:
            raise map_os_error(exc, path=marker, operation="stat marker") from exc
        else:
            if not stat.S_ISDIR(st.st_mode):
                raise NotADirectoryError(
                    f"{marker} is not a directory",
                    details={"path": marker},
                )

        try:
            os.makedirs(marker, mode=self._config.dir_mode, exist_ok=True)
        except OSError as exc:
            raise map_os_error(exc, path=marker, operation="create marker") from exc

        context = Context(abs_path=abs_path)
        self.write(context)
        if first_init:
            logger.info(f"Initialized context at {abs_path}")
        return marker, first_init, context

    # ----------------------------
    # Records
    # ----------------------------
    def read(self, context: Context) -> Context:
        """Load the credentials record for context.abs_path into a new Context."""
        path = self.credentials_path(context.abs_path)
        data = load_record(path)
        try:
            return Context.from_dict(context.abs_path, data)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(
                f"Malformed credentials record: {exc}",
                details={"path": path},
                cause=exc,
            ) from exc

    def write(self, context: Context) -> None:
        """Store the credentials record with owner-only permissions."""
        store_record(
            self.credentials_path(context.abs_path),
            context.to_dict(),
            self._config.record_mode,
        )

    def read_indices(self, context: Context, root: Optional[str] = None) -> IndexFile:
        """Load the index cache from root (defaults to the context root)."""
        path = self.indices_path(root if root is not None else context.abs_path)
        data = load_record(path)
        try:
            return IndexFile.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise MalformedRecordError(
                f"Malformed index record: {exc}",
                details={"path": path},
                cause=exc,
            ) from exc

    def write_indices(
        self,
        context: Context,
        index: IndexFile,
        root: Optional[str] = None,
    ) -> None:
        """Store the index cache at root (defaults to the context root)."""
        store_record(
            self.indices_path(root if root is not None else context.abs_path),
            index.to_dict(),
            self._config.record_mode,
        )

    # ----------------------------
    # Internals
    # ----------------------------
    @staticmethod
    def _is_dir(path: str) -> bool:
        try:
            return stat.S_ISDIR(os.stat(path).st_mode)
        except OSError:
            return False
