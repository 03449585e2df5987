"""Public error exports for drivelibrary."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    CacheError,
    CatalogContractError,
    ConfigError,
    ConflictError,
    DriveLibraryError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    is_retryable,
    map_http_error,
)

__all__ = [
    "DriveLibraryError",
    "CatalogContractError",
    "InvalidStateError",
    "ConfigError",
    "CacheError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
    "is_retryable",
]
