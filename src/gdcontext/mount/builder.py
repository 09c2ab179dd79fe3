"""MountBuilder: expose source paths as symbolic links under one mount root."""

from __future__ import annotations

import os
from typing import Optional, Sequence

from loguru import logger

from gdcontext.config import DEFAULT_CONFIG, ContextConfig
from gdcontext.errors import map_os_error
from gdcontext.models import Mount, MountPoint, MountReport, SourceOutcome, SourceResult
from gdcontext.probe import PathProbe


class MountBuilder:
    """
    Build a mount root of symbolic links and remember exactly what was created.

    Per-source failures never abort the call; each input path gets a
    SourceResult describing what happened to it. Only root-level failures
    (cannot stat or create the mount root) raise.
    """

    def __init__(
        self,
        config: ContextConfig = DEFAULT_CONFIG,
        *,
        probe: Optional[PathProbe] = None,
    ) -> None:
        self._config = config
        self._probe = probe if probe is not None else PathProbe(config)

    def mount_points(
        self,
        context_rel_path: str,
        context_abs_path: str,
        source_paths: Sequence[str],
        include_hidden: bool = False,
    ) -> tuple[Optional[Mount], list[str]]:
        """
        Link every usable source path into context_abs_path.

        Returns:
            (mount, sources): mount is None when no MountPoint was produced;
            sources lists the directories created for the mount root.
        """
        report = self.build(
            context_rel_path,
            context_abs_path,
            source_paths,
            include_hidden=include_hidden,
        )
        return report.mount, report.sources

    def build(
        self,
        context_rel_path: str,
        context_abs_path: str,
        source_paths: Sequence[str],
        include_hidden: bool = False,
    ) -> MountReport:
        """
        Same as mount_points, but also returns the per-source outcomes.

        Raises:
            IOFailureError: if the mount root cannot be statted (for a reason
                other than absence) or created.
            NotADirectoryError: if an ancestor of the mount root is not a
                directory.
        """
        created_root, shortest_mount_root, sources = self._prepare_root(context_abs_path)

        results: list[SourceResult] = []
        points: list[MountPoint] = []
        seen: set[str] = set()

        for source in source_paths:
            result = self._mount_one(
                source,
                context_rel_path,
                context_abs_path,
                include_hidden=include_hidden,
                seen=seen,
            )
            results.append(result)
            if result.point is not None:
                points.append(result.point)

        mount: Optional[Mount] = None
        if points and created_root:
            mount = Mount(
                points=points,
                created_mount_dir=context_abs_path,
                shortest_mount_root=shortest_mount_root,
            )
        elif points:
            mount = Mount(points=points)

        return MountReport(mount=mount, sources=sources, results=results)

    # ----------------------------
    # Internals
    # ----------------------------
    def _prepare_root(self, context_abs_path: str) -> tuple[bool, str, list[str]]:
        """
        Create the mount root if it is absent.

        Returns:
            (created_root, shortest_mount_root, sources). shortest_mount_root
            is the topmost directory this call created ("" if none).
        """
        try:
            os.stat(context_abs_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            raise map_os_error(exc, path=context_abs_path, operation="stat mount root") from exc
        else:
            return False, "", []

        shortest = self._probe.highest_non_existent_ancestor(context_abs_path)
        sources = [shortest] if shortest else []

        try:
            os.makedirs(context_abs_path, mode=self._config.dir_mode, exist_ok=True)
        except OSError as exc:
            raise map_os_error(exc, path=context_abs_path, operation="create mount root") from exc

        logger.info(f"Created mount root {context_abs_path} (topmost new directory: {shortest})")
        return True, shortest, sources

    def _mount_one(
        self,
        source: str,
        context_rel_path: str,
        context_abs_path: str,
        *,
        include_hidden: bool,
        seen: set[str],
    ) -> SourceResult:
        if source in seen:
            logger.debug(f"Skipping duplicate source {source}")
            return SourceResult(source=source, outcome="skipped-duplicate")
        seen.add(source)

        try:
            os.stat(source)
        except OSError as exc:
            logger.debug(f"Skipping missing source {source}: {exc}")
            return SourceResult(source=source, outcome="skipped-missing")

        base = self._probe.base_name(source)
        if not include_hidden and base.startswith(self._config.hidden_prefix):
            logger.debug(f"Skipping hidden source {source}")
            return SourceResult(source=source, outcome="skipped-hidden")

        mount_path = self._probe.join(context_abs_path, base)
        can_clean = True
        outcome: SourceOutcome = "created"
        try:
            os.symlink(source, mount_path)
        except FileExistsError:
            # The name is already taken, most likely by a previous run.
            logger.warning(f"{mount_path} already exists; it will not be removed on unmount")
            can_clean = False
            outcome = "collided"
        except OSError as exc:
            logger.warning(f"Could not link {source} at {mount_path}: {exc}")
            return SourceResult(source=source, outcome="skipped-link-error")

        point = MountPoint(
            source_path=source,
            mount_path=mount_path,
            name=_relative_name(context_rel_path, base),
            can_clean=can_clean,
        )
        return SourceResult(source=source, outcome=outcome, point=point)


def _relative_name(context_rel_path: str, base: str) -> str:
    if not context_rel_path:
        return "/".join(["", base])
    return "/".join(["", context_rel_path, base])
