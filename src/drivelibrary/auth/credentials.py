"""Credential loading and Google API service construction."""

from __future__ import annotations

import os
from typing import Any, Sequence

from google.auth.transport.requests import Request
from google.oauth2 import service_account
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build

from drivelibrary.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo


class CredentialsClient:
    """Create credentials and API service objects from AuthInfo."""

    def __init__(self, auth_info: AuthInfo) -> None:
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str]) -> Any:
        """
        Return valid credentials for the given scopes.

        Raises:
            AuthError: on load/refresh/flow failures.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        if self._auth_info.kind == "service_account":
            return self._service_account_credentials(scopes)
        return self._oauth_credentials(scopes)

    def build_service(self, api: str, version: str, scopes: Sequence[str]) -> Any:
        """
        Build an API service resource (e.g. "drive", "v3").

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.get_credentials(scopes)
        try:
            return build(api, version, credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError(
                f"Failed to build {api} {version} service",
                cause=exc,
            ) from exc

    def _service_account_credentials(self, scopes: Sequence[str]) -> Any:
        key_file = self._auth_info.credentials_file
        try:
            return service_account.Credentials.from_service_account_file(
                key_file,
                scopes=list(scopes),
            )
        except Exception as exc:
            raise AuthError(
                "Failed to load service account key",
                details={"credentials_file": key_file},
                cause=exc,
            ) from exc

    def _oauth_credentials(self, scopes: Sequence[str]) -> Any:
        token_file = self._auth_info.token_file or ""
        if os.path.exists(token_file):
            try:
                creds = Credentials.from_authorized_user_file(token_file, scopes=list(scopes))
            except Exception as exc:
                raise AuthError(
                    "Failed to load token_file",
                    details={"token_file": token_file},
                    cause=exc,
                ) from exc

            if not creds.valid and creds.refresh_token:
                try:
                    creds.refresh(Request())
                    self._save_credentials(creds)
                except Exception as exc:
                    raise AuthError(
                        "Failed to refresh OAuth credentials",
                        details={"token_file": token_file},
                        cause=exc,
                    ) from exc

            if creds.valid:
                return creds

        # No token, or token could not be refreshed -> run OAuth flow.
        client_secrets = self._auth_info.credentials_file
        try:
            flow = InstalledAppFlow.from_client_secrets_file(client_secrets, scopes=list(scopes))
            creds = flow.run_local_server(port=0)
        except Exception as exc:
            raise AuthError(
                "OAuth authorization flow failed",
                details={"credentials_file": client_secrets, "token_file": token_file},
                cause=exc,
            ) from exc
        self._save_credentials(creds)
        return creds

    def _save_credentials(self, creds: Any) -> None:
        token_file = self._auth_info.token_file
        if not token_file:
            return
        token_dir = os.path.dirname(token_file)
        if token_dir:
            os.makedirs(token_dir, exist_ok=True)

        try:
            with open(token_file, "w", encoding="utf-8") as f:
                f.write(creds.to_json())
        except OSError as exc:
            raise AuthError(
                "Failed to save OAuth token file",
                details={"token_file": token_file},
                cause=exc,
            ) from exc
