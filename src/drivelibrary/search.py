"""Full-text search across the configured drive(s)."""

from __future__ import annotations

from typing import Any

from drivelibrary.errors import DriveLibraryError
from drivelibrary.library import DriveLibrary
from drivelibrary.models import Resource
from drivelibrary.util.log import get_logger

logger = get_logger(__name__)


class SearchService:
    """
    Run Drive full-text searches and map hits onto the library catalog.

    Hits unknown to the current snapshot, anything under /trash and anything
    tagged "hidden" are dropped.
    """

    def __init__(self, library: DriveLibrary) -> None:
        self._library = library
        self._controller = library.controller
        self._settings = library.settings

    def run(self, query: str) -> list[Resource]:
        try:
            files = self._search(query)
        except DriveLibraryError as exc:
            logger.error("Error when searching for %s, %s", query, exc)
            raise

        results: list[Resource] = []
        for f in files:
            meta = self._library.get_meta(f["id"])
            if meta is None or meta.is_trashed or meta.is_hidden:
                continue
            results.append(meta)
        return results

    def _search(self, query: str) -> list[dict[str, Any]]:
        drive_type = self._settings.drive_type

        if drive_type == "folder":
            folder_ids = self._controller.list_folder_ids(str(self._settings.drive_id))
            return self._controller.search(query, drive_type="folder", folder_ids=folder_ids)

        if drive_type == "org":
            files: list[dict[str, Any]] = []
            for drive_id in self._library.get_org_drives():
                files.extend(self._controller.search(query, drive_type="org", drive_id=drive_id))
            return files

        return self._controller.search(query, drive_type="team", drive_id=self._settings.drive_id)
