"""OAuth credentials for a context's stored client id/secret/refresh token."""

from __future__ import annotations

from typing import Optional, Sequence

from loguru import logger

from gdcontext.errors import AuthError
from gdcontext.models import Context
from gdcontext.store import ContextStore


class OAuthClient:
    """Turn a Context's credential triple into google-auth credentials and back."""

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)
    TOKEN_URI = "https://oauth2.googleapis.com/token"
    AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

    def __init__(
        self,
        store: ContextStore,
        context: Context,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        if not use_scopes or not all(isinstance(s, str) and s.strip() for s in use_scopes):
            raise ValueError("scopes must be a non-empty sequence of strings")

        self._store = store
        self._context = context
        self._scopes = use_scopes

    @property
    def context(self) -> Context:
        return self._context

    def get_credentials(self, ensure_valid: bool = True):
        """
        Return OAuth credentials built from the context's credential triple.

        Args:
            ensure_valid: If True, refresh to obtain an access token.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: if the context holds no credentials or refresh fails.
        """
        if not self._context.is_authenticated:
            raise AuthError(
                "Context has no stored credentials; authorize first",
                details={"context": self._context.abs_path},
            )

        try:
            from google.auth.transport.requests import Request
            from google.oauth2.credentials import Credentials
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "Google auth libraries are not available",
                details={"hint": "Install google-auth"},
                cause=exc,
            ) from exc

        creds = Credentials(
            token=None,
            refresh_token=self._context.refresh_token,
            token_uri=self.TOKEN_URI,
            client_id=self._context.client_id,
            client_secret=self._context.client_secret,
            scopes=list(self._scopes),
        )
        if not ensure_valid:
            return creds

        try:
            creds.refresh(Request())
        except Exception as exc:
            raise AuthError(
                "Failed to refresh OAuth credentials",
                details={"context": self._context.abs_path},
                cause=exc,
            ) from exc
        return creds

    def authorize(self, client_id: str, client_secret: str) -> Context:
        """
        Run the installed-app OAuth flow and persist the resulting credentials.

        Returns:
            The authenticated Context (also written through the store).

        Raises:
            AuthError: if the flow fails or yields no refresh token.
            IOFailureError: if the credentials record cannot be written.
        """
        if not client_id or not client_secret:
            raise AuthError("client_id and client_secret are required")

        try:
            from google_auth_oauthlib.flow import InstalledAppFlow
        except Exception as exc:  # pragma: no cover
            raise AuthError(
                "google-auth-oauthlib is not available",
                details={"hint": "Install google-auth-oauthlib"},
                cause=exc,
            ) from exc

        client_config = {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": self.AUTH_URI,
                "token_uri": self.TOKEN_URI,
            }
        }
        try:
            flow = InstalledAppFlow.from_client_config(client_config, scopes=list(self._scopes))
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={"context": self._context.abs_path},
                cause=exc,
            ) from exc

        refresh_token = getattr(creds, "refresh_token", None)
        if not refresh_token:
            raise AuthError(
                "OAuth flow did not return a refresh token",
                details={"context": self._context.abs_path},
            )

        context = self._context.with_credentials(client_id, client_secret, refresh_token)
        self._store.write(context)
        self._context = context
        logger.info(f"Stored credentials for context {context.abs_path}")
        return context
