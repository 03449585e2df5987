from __future__ import annotations

import re

FOLDER_MIME: str = "application/vnd.google-apps.folder"

# Short resource types (see clean_resource_type).
FOLDER: str = "folder"
DOCUMENT: str = "document"
SPREADSHEET: str = "spreadsheet"
PRESENTATION: str = "presentation"
HTML: str = "text/html"
ORG: str = "org"
TEAM_DRIVE: str = "teamDrive"

# Types the site renders itself; everything else links out to Drive.
SUPPORTED_TYPES: frozenset[str] = frozenset({FOLDER, DOCUMENT, SPREADSHEET, HTML})

_GOOGLE_APPS_RE = re.compile(r"application/vnd\.google-apps\.(.+)$")


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def clean_resource_type(mime_type: str) -> str:
    """
    Strip the Google-apps vendor prefix from a MIME type.

    "application/vnd.google-apps.document" -> "document"; any other value is
    returned unchanged ("text/html", "application/pdf", "org", ...).
    """
    match = _GOOGLE_APPS_RE.search(mime_type)
    if not match:
        return mime_type
    return match.group(1)


def is_supported(resource_type: str) -> bool:
    return resource_type in SUPPORTED_TYPES
