"""Authentication information for drivelibrary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

AUTH_KINDS: tuple[str, ...] = ("service_account", "oauth")


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    kind = "service_account":
        data must include `credentials_file` (service account key JSON).
    kind = "oauth":
        data must include `credentials_file` (OAuth client secrets JSON) and
        `token_file` (authorized-user token cache).
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind not in AUTH_KINDS:
            raise ValueError(f"AuthInfo.kind must be one of {AUTH_KINDS}")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        required = ("credentials_file", "token_file") if self.kind == "oauth" else (
            "credentials_file",
        )
        for key in required:
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @property
    def credentials_file(self) -> str:
        return str(self.data["credentials_file"])

    @property
    def token_file(self) -> Optional[str]:
        value = self.data.get("token_file")
        return str(value) if value else None
