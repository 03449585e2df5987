"""Cache collaborator exports for drivelibrary."""

from __future__ import annotations

from .client import CacheClient, LoggingCacheClient

__all__ = ["CacheClient", "LoggingCacheClient"]
