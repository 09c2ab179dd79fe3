"""Workspace: a discovered context plus mount/unmount around it."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Sequence

from gdcontext.config import DEFAULT_CONFIG, ContextConfig
from gdcontext.errors import map_os_error
from gdcontext.models import Context, IndexFile, Mount, MountReport
from gdcontext.mount import MountBuilder
from gdcontext.probe import PathProbe
from gdcontext.store import ContextStore
from gdcontext.util.fs import remove_all


class Workspace:
    """High-level entry point: resolve a context, then mount sources under it."""

    def __init__(
        self,
        context: Context,
        *,
        config: ContextConfig = DEFAULT_CONFIG,
        first_init: bool = False,
    ) -> None:
        probe = PathProbe(config)
        self._config = config
        self._probe = probe
        self._store = ContextStore(config, probe=probe)
        self._builder = MountBuilder(config, probe=probe)
        self._context = context
        self.first_init = first_init

    @classmethod
    def discover(
        cls,
        start_path: str,
        *,
        config: ContextConfig = DEFAULT_CONFIG,
    ) -> Workspace:
        """
        Resolve the context enclosing start_path.

        Raises:
            NoContextFoundError: if no marker directory is found above start_path.
        """
        context = ContextStore(config).discover(start_path)
        return cls(context, config=config)

    @classmethod
    def initialize(
        cls,
        abs_path: str,
        *,
        config: ContextConfig = DEFAULT_CONFIG,
    ) -> Workspace:
        _, first_init, context = ContextStore(config).initialize(abs_path)
        return cls(context, config=config, first_init=first_init)

    @property
    def context(self) -> Context:
        return self._context

    @property
    def store(self) -> ContextStore:
        return self._store

    def abs_path_of(self, file_or_dir_path: str) -> str:
        """Join a context-relative path onto the context root."""
        rel = file_or_dir_path.lstrip(self._probe.separator)
        return self._probe.join(self._context.abs_path, rel)

    def save(self, context: Optional[Context] = None) -> None:
        """Persist credentials (optionally replacing the held context first)."""
        if context is not None:
            if context.abs_path != self._context.abs_path:
                raise ValueError("cannot replace the context with one for another root")
            self._context = context
        self._store.write(self._context)

    def read_indices(self) -> IndexFile:
        return self._store.read_indices(self._context)

    def write_indices(self, index: IndexFile) -> None:
        self._store.write_indices(self._context, index)

    def mount(
        self,
        rel_path: str,
        mount_abs_path: str,
        sources: Sequence[str],
        include_hidden: bool = False,
    ) -> MountReport:
        """
        Link sources under mount_abs_path.

        Returns:
            The MountReport. report.mount is None if no source could be
            linked, but report.sources still lists any directories created
            for the mount root. Pass the report to unmount() when done.
        """
        return self._builder.build(
            rel_path,
            mount_abs_path,
            sources,
            include_hidden=include_hidden,
        )

    def unmount(self, report: MountReport) -> None:
        """
        Undo a mount(): tear down the Mount, or remove the directories
        created for a root that ended up with no MountPoint.

        Raises:
            IOFailureError: on the first removal failure.
        """
        if report.mount is not None:
            report.mount.unmount()
            return

        for path in report.sources:
            try:
                remove_all(path)
            except OSError as exc:
                raise map_os_error(exc, path=path, operation="remove mount root") from exc

    @contextmanager
    def mounted(
        self,
        rel_path: str,
        mount_abs_path: str,
        sources: Sequence[str],
        include_hidden: bool = False,
    ) -> Iterator[Optional[Mount]]:
        """Mount for the duration of a with-block; tear down on exit."""
        report = self.mount(rel_path, mount_abs_path, sources, include_hidden=include_hidden)
        try:
            yield report.mount
        finally:
            self.unmount(report)
