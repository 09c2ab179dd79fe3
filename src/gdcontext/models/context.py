"""Context record: a working root plus its stored OAuth credentials."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

_CREDENTIAL_KEYS: tuple[str, ...] = ("client_id", "client_secret", "refresh_token")


@dataclass(slots=True, frozen=True)
class Context:
    """
    A discovered or initialized context root.

    Notes:
        - abs_path is fixed for the lifetime of the object; it is never
          serialized into the credentials record.
        - The credential triple is either fully empty (unauthenticated) or
          fully set.
    """

    abs_path: str
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.abs_path, str) or not self.abs_path:
            raise ValueError("Context.abs_path must be a non-empty string")

        values = [getattr(self, key) for key in _CREDENTIAL_KEYS]
        for key, value in zip(_CREDENTIAL_KEYS, values):
            if not isinstance(value, str):
                raise TypeError(f"Context.{key} must be a string")
        if any(values) and not all(values):
            raise ValueError(
                "Context credentials must be fully set or fully empty "
                "(client_id, client_secret, refresh_token)"
            )

    @property
    def is_authenticated(self) -> bool:
        return bool(self.refresh_token)

    def with_credentials(
        self,
        client_id: str,
        client_secret: str,
        refresh_token: str,
    ) -> Context:
        """Return a copy of this context holding the given credential triple."""
        return replace(
            self,
            client_id=client_id,
            client_secret=client_secret,
            refresh_token=refresh_token,
        )

    def to_dict(self) -> dict[str, Any]:
        return {key: getattr(self, key) for key in _CREDENTIAL_KEYS}

    @classmethod
    def from_dict(cls, abs_path: str, data: dict[str, Any]) -> Context:
        """
        Build a Context from a credentials record.

        Missing keys default to empty strings; non-string values raise
        TypeError and a partial triple raises ValueError.
        """
        if not isinstance(data, dict):
            raise TypeError("credentials record must be a JSON object")
        return cls(
            abs_path=abs_path,
            **{key: data.get(key, "") for key in _CREDENTIAL_KEYS},
        )
