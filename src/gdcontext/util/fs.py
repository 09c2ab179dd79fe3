"""Small filesystem helpers shared by the store and mount teardown."""

from __future__ import annotations

import os
import shutil
import stat


def remove_all(path: str) -> None:
    """
    Remove path and anything below it, never following symbolic links.

    A symbolic link is unlinked (its target is left alone), a real directory
    is removed recursively, and a missing path is not an error.

    Raises:
        OSError: on any other removal failure.
    """
    try:
        st = os.lstat(path)
    except FileNotFoundError:
        return

    if stat.S_ISDIR(st.st_mode):
        shutil.rmtree(path)
    else:
        os.unlink(path)


def write_private_file(path: str, data: bytes, mode: int) -> None:
    """
    Write data to path, creating or truncating it with the given mode.

    The mode is re-applied to a pre-existing file as well.

    Raises:
        OSError: on open/write/chmod failures.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    os.chmod(path, mode)
