"""drivelibrary public API."""

from __future__ import annotations

from drivelibrary.auth import AuthInfo, CredentialsClient
from drivelibrary.cache import CacheClient, LoggingCacheClient
from drivelibrary.config import Settings, get_settings
from drivelibrary.controller import DriveListingController, ListPage
from drivelibrary.errors import (
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
    map_http_error,
)
from drivelibrary.library import DriveLibrary
from drivelibrary.models import (
    AdjacencyEntry,
    Crumb,
    PurgeInstruction,
    RawResource,
    RedirectInstruction,
    Resource,
    Snapshot,
    TreeNode,
)
from drivelibrary.search import SearchService
from drivelibrary.tree import CacheNotifier, ChangeDetector, PathResolver, TreeBuilder

__all__ = [
    # High-level
    "DriveLibrary",
    "SearchService",
    "Settings",
    "get_settings",
    # Collaborators
    "DriveListingController",
    "ListPage",
    "CacheClient",
    "LoggingCacheClient",
    "AuthInfo",
    "CredentialsClient",
    # Tree
    "TreeBuilder",
    "PathResolver",
    "ChangeDetector",
    "CacheNotifier",
    # Models
    "RawResource",
    "Resource",
    "AdjacencyEntry",
    "Crumb",
    "TreeNode",
    "Snapshot",
    "PurgeInstruction",
    "RedirectInstruction",
    # Errors
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
]
