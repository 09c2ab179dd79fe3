"""Result records of a mount operation and their teardown."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal, Optional

from loguru import logger

from gdcontext.errors import map_os_error
from gdcontext.util.fs import remove_all

SourceOutcome = Literal[
    "created",
    "skipped-duplicate",
    "skipped-missing",
    "skipped-hidden",
    "collided",
    "skipped-link-error",
]


@dataclass(slots=True)
class MountPoint:
    """
    One symbolic link from a source path into the mount root.

    Notes:
        - can_clean is True only when the call that produced this point
          created the link itself. A False value means the name was already
          taken and the entry must never be removed by this session.
    """

    source_path: str
    mount_path: str
    name: str
    can_clean: bool

    @property
    def mounted(self) -> bool:
        # Trusts the creation flag; see link_intact() for an explicit check.
        return self.can_clean

    def link_intact(self) -> bool:
        """Return True if mount_path is still a link pointing at source_path."""
        try:
            return os.readlink(self.mount_path) == self.source_path
        except OSError:
            return False

    def unmount(self) -> None:
        """
        Remove the link if this session created it; otherwise do nothing.

        Raises:
            IOFailureError: if removal fails.
        """
        if not self.mounted:
            logger.debug(f"Leaving {self.mount_path} in place (not created by this mount)")
            return
        try:
            remove_all(self.mount_path)
        except OSError as exc:
            raise map_os_error(exc, path=self.mount_path, operation="unmount") from exc


@dataclass(slots=True)
class Mount:
    """
    Aggregate result of one mount call.

    created_mount_dir and shortest_mount_root are both None when the mount
    root pre-existed, and both set when the call created it.
    """

    points: list[MountPoint]
    created_mount_dir: Optional[str] = None
    shortest_mount_root: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.created_mount_dir is None) != (self.shortest_mount_root is None):
            raise ValueError(
                "Mount.created_mount_dir and Mount.shortest_mount_root must be set together"
            )

    @property
    def created_root(self) -> bool:
        return self.created_mount_dir is not None

    def unmount(self) -> None:
        """
        Tear down every point, then remove the directories the mount created.

        Raises:
            IOFailureError: on the first removal failure.
        """
        for point in self.points:
            point.unmount()

        if self.shortest_mount_root:
            try:
                remove_all(self.shortest_mount_root)
            except OSError as exc:
                raise map_os_error(
                    exc,
                    path=self.shortest_mount_root,
                    operation="remove mount root",
                ) from exc
            logger.info(f"Removed mount root {self.shortest_mount_root}")


@dataclass(slots=True)
class SourceResult:
    """What happened to one input source path."""

    source: str
    outcome: SourceOutcome
    point: Optional[MountPoint] = None


@dataclass(slots=True)
class MountReport:
    """
    Full outcome of MountBuilder.build.

    Attributes:
        mount: The Mount, or None when no source produced a MountPoint.
        sources: Directories created for the mount root (the shortest mount
            root), in creation order.
        results: One SourceResult per input path, in input order.
    """

    mount: Optional[Mount]
    sources: list[str] = field(default_factory=list)
    results: list[SourceResult] = field(default_factory=list)

    def outcomes(self) -> dict[SourceOutcome, int]:
        summary: dict[SourceOutcome, int] = {}
        for r in self.results:
            summary[r.outcome] = summary.get(r.outcome, 0) + 1
        return summary
