"""Tree building, path resolution and change detection."""

from __future__ import annotations

from .builder import BuildResult, TreeBuilder, catalog_entry
from .changes import CacheNotifier, ChangeDetector, classify_cache_error
from .paths import PathResolver

__all__ = [
    "BuildResult",
    "TreeBuilder",
    "catalog_entry",
    "PathResolver",
    "ChangeDetector",
    "CacheNotifier",
    "classify_cache_error",
]
