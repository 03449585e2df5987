"""
Parsing of the metadata editors embed in Drive file names.

Grammar of a raw name (every part optional)::

    [<digits><delimiters>] <title> [<non-word>home] [.<ext>] [| tag, tag, ...]

- A leading digit run sets the sort order ("03 - Intro" sorts as "03").
- A trailing pipe segment carries comma-separated tags.
- A word "home" at the end (or before a comma in the tag list) marks the
  file as its folder's landing page.
"""

from __future__ import annotations

import re
import unicodedata

_LEADING_SORT_RE = re.compile(r"^\d+[-–—_\s]*")
_TRAILING_PIPE_RE = re.compile(r"\s*\|\s*([^|]+)$")
_HOME_SUFFIX_RE = re.compile(r"\W+home$", re.IGNORECASE)
_EXTENSION_RE = re.compile(r"\.[^.]+$")

_TAGS_RE = re.compile(r"\|\s*([^|]+)$")
_HOME_MARKER_RE = re.compile(r"\bhome(?:,|$)", re.IGNORECASE)
_SORT_RE = re.compile(r"^\s*(\d+)\D")
_NON_ALNUM_RE = re.compile(r"[^0-9A-Za-z]+")


def clean_name(name: str = "") -> str:
    """
    Return the display name: sort prefix, tag segment, "home" suffix and
    file extension removed (each at most once).

    >>> clean_name("3 - Getting Started | Team A Home.docx")
    'Getting Started'
    """
    name = name.strip()
    name = _LEADING_SORT_RE.sub("", name, count=1)
    name = _TRAILING_PIPE_RE.sub("", name, count=1)
    name = _HOME_SUFFIX_RE.sub("", name, count=1)
    return _EXTENSION_RE.sub("", name, count=1)


def slugify(text: str = "") -> str:
    """Lowercase, hyphen-joined ASCII words; everything else is a separator."""
    ascii_text = (
        unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    )
    words = _NON_ALNUM_RE.sub(" ", ascii_text).split()
    return "-".join(words).lower()


def clean_slug(name: str = "") -> str:
    """Slug of a shared drive name, as used in org-mode URLs."""
    return clean_name(slugify(name))


def parse_tags(name: str = "") -> tuple[str, ...]:
    match = _TAGS_RE.search(name)
    if not match:
        return ()

    tags: list[str] = []
    for raw in match.group(1).split(","):
        tag = raw.strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tuple(tags)


def determine_sort(name: str = "") -> str:
    # Leading numbers stay strings so one key sorts numbered and plain names.
    match = _SORT_RE.match(name)
    return match.group(1) if match else clean_name(name)


def matches_home(name: str = "") -> bool:
    return _HOME_MARKER_RE.search(name.strip()) is not None
