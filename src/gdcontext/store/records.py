"""JSON record load/store with gdcontext error mapping."""

from __future__ import annotations

import json
from typing import Any

from gdcontext.errors import MalformedRecordError, map_os_error
from gdcontext.util.fs import write_private_file


def load_record(path: str) -> dict[str, Any]:
    """
    Read a JSON object from path.

    Raises:
        IOFailureError: if the file cannot be read.
        MalformedRecordError: if the content is not a JSON object.
    """
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as exc:
        raise map_os_error(exc, path=path, operation="read record") from exc

    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise MalformedRecordError(
            "Record is not valid JSON",
            details={"path": path},
            cause=exc,
        ) from exc

    if not isinstance(data, dict):
        raise MalformedRecordError(
            "Record must be a JSON object",
            details={"path": path, "type": type(data).__name__},
        )
    return data


def store_record(path: str, data: dict[str, Any], mode: int) -> None:
    """
    Write data as JSON to path with the given (owner-only) mode.

    Raises:
        IOFailureError: if the file cannot be written.
    """
    payload = json.dumps(data, separators=(",", ":")).encode("utf-8")
    try:
        write_private_file(path, payload, mode)
    except OSError as exc:
        raise map_os_error(exc, path=path, operation="write record") from exc
