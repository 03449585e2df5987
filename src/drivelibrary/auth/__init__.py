"""Public auth exports for drivelibrary."""

from __future__ import annotations

from .auth_info import AUTH_KINDS, AuthInfo
from .credentials import CredentialsClient

__all__ = ["AUTH_KINDS", "AuthInfo", "CredentialsClient"]
