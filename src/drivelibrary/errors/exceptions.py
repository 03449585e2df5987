"""Exception hierarchy and HTTP error mapping for drivelibrary."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DriveLibraryError(Exception):
    """
    Base exception for drivelibrary.

    Attributes:
        details: Structured context (HTTP status, offending id, missing fields).
        cause: The lower-level exception this error wraps, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


# --- catalog / library state ---


class CatalogContractError(DriveLibraryError):
    """A listed record lacks id, name or parents. Aborts the rebuild."""


class InvalidStateError(DriveLibraryError):
    """The library or controller was used before it could serve the call."""


class ConfigError(DriveLibraryError):
    """Settings are incomplete or contradictory."""


class CacheError(DriveLibraryError):
    """A cache purge or redirect was rejected downstream."""


# --- Google API failures ---


class AuthError(DriveLibraryError):
    """Credentials could not be loaded, refreshed or authorized (HTTP 401)."""


class PermissionError(DriveLibraryError):
    """The credentials cannot see the drive or file (HTTP 403)."""


class InvalidArgumentError(DriveLibraryError):
    """The API rejected the request parameters (HTTP 400)."""


class NotFoundError(DriveLibraryError):
    """Drive, folder or file does not exist (HTTP 404)."""


class ConflictError(DriveLibraryError):
    """HTTP 409/412."""


class RateLimitError(DriveLibraryError):
    """Too many requests; retried by the controller (HTTP 429)."""


class QuotaExceededError(DriveLibraryError):
    """Project or user quota exhausted (HTTP 403 with a quota reason)."""


class NetworkError(DriveLibraryError):
    """Connection or timeout failure before a response arrived."""


class ApiError(DriveLibraryError):
    """Anything the mapping does not classify (5xx, unknown 4xx)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Status, reason and message pulled out of an HTTP error response."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_STATUS_ERRORS: dict[int, type[DriveLibraryError]] = {
    400: InvalidArgumentError,
    401: AuthError,
    404: NotFoundError,
    409: ConflictError,
    412: ConflictError,
    429: RateLimitError,
}

_QUOTA_REASONS: tuple[str, ...] = (
    "quota",
    "userratelimitexceeded",
    "dailylimitexceeded",
    "usagelimits",
)


def _forbidden_error(reason: str | None) -> type[DriveLibraryError]:
    # Drive reports per-second throttling as 403 rateLimitExceeded.
    if reason == "rateLimitExceeded":
        return RateLimitError
    if reason and any(key in reason.lower() for key in _QUOTA_REASONS):
        return QuotaExceededError
    return PermissionError


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> DriveLibraryError:
    """
    Map an HTTP error from the Drive/Sheets APIs to a drivelibrary exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> RateLimitError for rateLimitExceeded, QuotaExceededError if
          quota-related, PermissionError otherwise
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    if info.status_code == 403:
        error_cls = _forbidden_error(info.reason)
    else:
        error_cls = _STATUS_ERRORS.get(info.status_code, ApiError)

    message = info.message or f"HTTP error {info.status_code}"
    return error_cls(message, details=details, cause=cause)


def is_retryable(exc: BaseException) -> bool:
    """Throttling, network failures and 5xx responses are worth retrying."""
    if isinstance(exc, (RateLimitError, NetworkError)):
        return True
    if isinstance(exc, ApiError):
        status_code = exc.details.get("status_code")
        return isinstance(status_code, int) and 500 <= status_code <= 599
    return False
