"""Field definitions for Google Drive API responses."""

from __future__ import annotations

RESOURCE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "webViewLink,"
    "createdTime,"
    "modifiedTime,"
    "lastModifyingUser"
)

LIST_FIELDS: str = f"nextPageToken,files({RESOURCE_FIELDS})"

# Search results are mapped back onto the catalog, so ids suffice.
SEARCH_FIELDS: str = "nextPageToken,files(id,name,mimeType,parents)"

FOLDER_FIELDS: str = "nextPageToken,files(id,name,mimeType,parents)"

DRIVE_FIELDS: str = "nextPageToken,drives(id,name)"
