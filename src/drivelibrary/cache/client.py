"""Downstream HTTP cache interface."""

from __future__ import annotations

from typing import Optional, Protocol, Sequence, runtime_checkable

from drivelibrary.util.log import get_logger

logger = get_logger(__name__)


@runtime_checkable
class CacheClient(Protocol):
    """
    Edge cache that serves the rendered site.

    Implementations raise on failure; the message text is used to tell
    duplicate purges ("Same purge id as previous") and missing/fresh content
    ("Not found", "No purge of fresh content") apart from real errors.
    """

    def purge(
        self,
        *,
        url: str,
        modified: Optional[str] = None,
        edit_email: Optional[str] = None,
        ignore: Sequence[str] = (),
    ) -> None: ...

    def redirect(self, old_url: str, new_url: str, modified: Optional[str] = None) -> None: ...


class LoggingCacheClient:
    """Cache client for deployments without an edge cache: logs and returns."""

    def purge(
        self,
        *,
        url: str,
        modified: Optional[str] = None,
        edit_email: Optional[str] = None,
        ignore: Sequence[str] = (),
    ) -> None:
        logger.debug("purge %s (modified=%s, edit=%s)", url, modified, edit_email)

    def redirect(self, old_url: str, new_url: str, modified: Optional[str] = None) -> None:
        logger.debug("redirect %s -> %s (modified=%s)", old_url, new_url, modified)
