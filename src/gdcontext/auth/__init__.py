"""Public auth exports for gdcontext."""

from __future__ import annotations

from .oauth_client import OAuthClient

__all__ = ["OAuthClient"]
