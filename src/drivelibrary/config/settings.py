"""Application settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from drivelibrary.auth import AuthInfo
from drivelibrary.errors import ConfigError

DriveType = Literal["team", "org", "folder"]


class Settings(BaseSettings):
    """Environment configuration (no prefix: DRIVE_TYPE, DRIVE_ID, ...)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Drive scope
    drive_type: DriveType = Field(
        default="team",
        description="Drive scope mode: team, org or folder",
    )
    drive_id: Optional[str] = Field(
        default=None,
        description="Shared drive id (team) or shared folder id (folder)",
    )
    drive_org_name: Optional[str] = Field(
        default=None,
        description="Name of the virtual root holding every shared drive (org)",
    )

    # Refresh
    list_update_delay: int = Field(
        default=15,
        gt=0,
        description="Seconds between tree refreshes",
    )

    # Auth
    auth_kind: Literal["service_account", "oauth"] = Field(default="service_account")
    credentials_file: Optional[Path] = Field(
        default=None,
        validation_alias="GOOGLE_APPLICATION_CREDENTIALS",
        description="Service account key or OAuth client secrets JSON",
    )
    token_file: Optional[Path] = Field(
        default=None,
        description="OAuth token cache (oauth only)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="Optional log file path",
    )

    @model_validator(mode="after")
    def _check_drive_scope(self) -> Settings:
        if self.drive_type == "org":
            if not self.drive_org_name:
                raise ValueError("DRIVE_ORG_NAME is required when DRIVE_TYPE is 'org'")
        elif not self.drive_id:
            raise ValueError(f"DRIVE_ID is required when DRIVE_TYPE is '{self.drive_type}'")
        return self

    @property
    def refresh_interval(self) -> float:
        """Refresh interval in seconds."""
        return float(self.list_update_delay)

    def auth_info(self) -> AuthInfo:
        if self.credentials_file is None:
            raise ConfigError("GOOGLE_APPLICATION_CREDENTIALS is not set")

        data: dict[str, str] = {"credentials_file": str(self.credentials_file)}
        if self.token_file is not None:
            data["token_file"] = str(self.token_file)
        try:
            return AuthInfo(kind=self.auth_kind, data=data)
        except ValueError as exc:
            raise ConfigError(str(exc), cause=exc) from exc


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset global settings instance."""
    global _settings
    _settings = None
