"""Cache instructions produced by change detection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(slots=True, frozen=True)
class PurgeInstruction:
    """
    Invalidate cached content at `url`.

    `ignore` lists error kinds the cache may treat as non-fatal
    ("missing": nothing cached at url, "modified": stale modified time).
    """

    url: str
    modified: Optional[str] = None
    edit_email: Optional[str] = None
    ignore: tuple[str, ...] = ()


@dataclass(slots=True, frozen=True)
class RedirectInstruction:
    old_url: str
    new_url: str
    modified: Optional[str] = None


CacheInstruction = Union[PurgeInstruction, RedirectInstruction]
