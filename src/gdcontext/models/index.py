"""Cached metadata for remotely tracked files."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from gdcontext.util.time import from_unix, now_utc, to_unix


@dataclass(slots=True)
class IndexEntry:
    """One remotely tracked file, as last seen by the remote client."""

    file_id: str
    etag: str = ""
    md5_checksum: str = ""
    mime_type: str = ""
    mod_time: int = 0
    version: int = 0
    remote: bool = False

    @property
    def modified_at(self) -> datetime:
        return from_unix(self.mod_time)

    @classmethod
    def from_metadata(
        cls,
        file_id: str,
        *,
        modified_time: Optional[datetime] = None,
        etag: str = "",
        md5_checksum: str = "",
        mime_type: str = "",
        version: int = 0,
        remote: bool = False,
    ) -> IndexEntry:
        return cls(
            file_id=file_id,
            etag=etag,
            md5_checksum=md5_checksum,
            mime_type=mime_type,
            mod_time=to_unix(modified_time if modified_time is not None else now_utc()),
            version=version,
            remote=remote,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_id": self.file_id,
            "etag": self.etag,
            "md5_checksum": self.md5_checksum,
            "mime_type": self.mime_type,
            "mod_time": self.mod_time,
            "version": self.version,
            "remote": self.remote,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IndexEntry:
        if not isinstance(data, dict):
            raise TypeError("index entry must be a JSON object")

        for key in ("file_id", "etag", "md5_checksum", "mime_type"):
            if not isinstance(data.get(key, ""), str):
                raise TypeError(f"index entry '{key}' must be a string")
        for key in ("mod_time", "version"):
            value = data.get(key, 0)
            # bool is an int subclass; reject it explicitly.
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"index entry '{key}' must be an integer")
        if not isinstance(data.get("remote", False), bool):
            raise TypeError("index entry 'remote' must be a boolean")

        return cls(
            file_id=data.get("file_id", ""),
            etag=data.get("etag", ""),
            md5_checksum=data.get("md5_checksum", ""),
            mime_type=data.get("mime_type", ""),
            mod_time=data.get("mod_time", 0),
            version=data.get("version", 0),
            remote=data.get("remote", False),
        )


@dataclass(slots=True)
class IndexFile:
    """Named collection of IndexEntry, persisted as the context's index cache."""

    name: str = ""
    index: list[IndexEntry] = field(default_factory=list)

    def get(self, file_id: str) -> Optional[IndexEntry]:
        for entry in self.index:
            if entry.file_id == file_id:
                return entry
        return None

    def upsert(self, entry: IndexEntry) -> None:
        """Replace the entry with the same file_id, or append a new one."""
        for i, existing in enumerate(self.index):
            if existing.file_id == entry.file_id:
                self.index[i] = entry
                return
        self.index.append(entry)

    def remove(self, file_id: str) -> bool:
        """Remove the entry for file_id. Returns False if it was not present."""
        before = len(self.index)
        self.index = [e for e in self.index if e.file_id != file_id]
        return len(self.index) != before

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "index": [e.to_dict() for e in self.index]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> IndexFile:
        if not isinstance(data, dict):
            raise TypeError("index file must be a JSON object")

        name = data.get("name", "")
        if not isinstance(name, str):
            raise TypeError("index file 'name' must be a string")

        # An empty index may be stored as null.
        raw = data.get("index") or []
        if not isinstance(raw, list):
            raise TypeError("index file 'index' must be a list")

        return cls(name=name, index=[IndexEntry.from_dict(item) for item in raw])
