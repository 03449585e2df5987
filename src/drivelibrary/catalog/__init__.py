"""Name parsing and tag indexing for Drive resources."""

from __future__ import annotations

from .names import (
    clean_name,
    clean_slug,
    determine_sort,
    matches_home,
    parse_tags,
    slugify,
)
from .tag_index import TagIndex

__all__ = [
    "clean_name",
    "clean_slug",
    "determine_sort",
    "matches_home",
    "parse_tags",
    "slugify",
    "TagIndex",
]
