"""DriveLibrary: keeps the current snapshot of the drive and serves queries."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any, Optional, Union
from urllib.parse import urlparse

from drivelibrary.cache import CacheClient, LoggingCacheClient
from drivelibrary.catalog import clean_slug
from drivelibrary.config import Settings
from drivelibrary.controller import DriveListingController
from drivelibrary.errors import InvalidStateError
from drivelibrary.models import (
    EMPTY_SNAPSHOT,
    AdjacencyEntry,
    RawResource,
    Resource,
    Snapshot,
    TreeNode,
)
from drivelibrary.tree import CacheNotifier, TreeBuilder
from drivelibrary.util.inflight import Inflight
from drivelibrary.util.log import get_logger

logger = get_logger(__name__)

REFRESH_KEY = "tree"
PLAYLIST_RANGE = "A1:A100"


class DriveLibrary:
    """
    Process-wide owner of the current Snapshot.

    - refresh() rebuilds from the listing service; concurrent callers share
      one rebuild. A failed rebuild leaves the previous snapshot in place.
    - start() refreshes on a fixed interval in a daemon thread until stop().
    - Tree queries block until the first rebuild has succeeded; the other
      queries read whatever snapshot is current.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        cache: Optional[CacheClient] = None,
    ) -> None:
        self._init_state(
            settings,
            DriveListingController(settings.auth_info()),
            cache,
        )

    @classmethod
    def from_controller(
        cls,
        controller: DriveListingController,
        settings: Settings,
        *,
        cache: Optional[CacheClient] = None,
    ) -> "DriveLibrary":
        """Create library with an injected controller (useful for tests)."""
        obj = cls.__new__(cls)
        obj._init_state(settings, controller, cache)
        return obj

    def _init_state(
        self,
        settings: Settings,
        controller: DriveListingController,
        cache: Optional[CacheClient],
    ) -> None:
        self._settings = settings
        self._controller = controller
        self._notifier = CacheNotifier(cache if cache is not None else LoggingCacheClient())
        self._snapshot: Snapshot = EMPTY_SNAPSHOT
        self._ready = threading.Event()
        self._inflight: Inflight[tuple[TreeNode, ...]] = Inflight()
        self._playlists: dict[str, list[str]] = {}
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def controller(self) -> DriveListingController:
        return self._controller

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def snapshot(self) -> Snapshot:
        """The currently published snapshot (empty before the first rebuild)."""
        return self._snapshot

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    # ----------------------------
    # Refresh
    # ----------------------------
    def refresh(self) -> tuple[TreeNode, ...]:
        """Rebuild the snapshot, or wait for the rebuild already running."""
        return self._inflight.run(REFRESH_KEY, self._rebuild)

    def refresh_once(self) -> bool:
        """One scheduler tick: refresh and log instead of raising."""
        logger.debug("updating tree...")
        try:
            self.refresh()
        except Exception as exc:
            logger.warning("failed updating tree: %s", exc, exc_info=True)
            return False
        logger.debug("tree updated.")
        return True

    def start(self) -> None:
        """Refresh now and then every `list_update_delay` seconds."""
        if self._thread is not None and self._thread.is_alive():
            raise InvalidStateError("Refresh scheduler is already running")

        self._stop.clear()
        self._thread = threading.Thread(
            target=self._run_schedule,
            name="drivelibrary-refresh",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            if not self._thread.is_alive():
                self._thread = None

    def _run_schedule(self) -> None:
        interval = self._settings.refresh_interval
        while not self._stop.is_set():
            self.refresh_once()
            self._stop.wait(interval)

    def _rebuild(self) -> tuple[TreeNode, ...]:
        files_by_root, org_drives = self._list_files()
        builder = TreeBuilder(
            drive_type=self._settings.drive_type,
            org_name=self._settings.drive_org_name,
            org_drives=org_drives,
        )
        result = builder.build(files_by_root, previous=self._snapshot)

        # Single reference swap: readers see the old or the new snapshot.
        self._snapshot = result.snapshot
        self._ready.set()

        logger.debug("Current file count in drive: %d", result.snapshot.file_count())
        self._notifier.dispatch(result.instructions)
        return result.snapshot.trees

    def _list_files(
        self,
    ) -> tuple[dict[str, list[RawResource]], dict[str, dict[str, str]]]:
        settings = self._settings
        if settings.drive_type == "org":
            drives = self._controller.list_drives()
            files = {
                d["id"]: self._controller.fetch_all_files([d["id"]], drive_type="org")
                for d in drives
            }
            return files, {d["id"]: d for d in drives}

        drive_id = str(settings.drive_id)
        files = self._controller.fetch_all_files([drive_id], drive_type=settings.drive_type)
        return {drive_id: files}, {}

    def _ready_snapshot(self) -> Snapshot:
        if not self._ready.is_set():
            self.refresh()
        return self._snapshot

    # ----------------------------
    # Queries
    # ----------------------------
    def get_tree(self) -> Optional[TreeNode]:
        trees = self._ready_snapshot().trees
        return trees[0] if trees else None

    def get_all_trees(self) -> list[TreeNode]:
        return list(self._ready_snapshot().trees)

    def get_tree_for_drive_slug(self, slug: str) -> Optional[TreeNode]:
        snapshot = self._ready_snapshot()
        for tree in snapshot.trees:
            drive = snapshot.org_drives.get(tree.id)
            if drive is not None and clean_slug(str(drive.get("name", ""))) == slug:
                return tree
        return None

    def has_drive(self, slug: Optional[str]) -> bool:
        if not slug:
            return False
        return any(
            clean_slug(str(d.get("name", ""))) == slug
            for d in self._snapshot.org_drives.values()
        )

    def get_meta(self, resource_id: str) -> Optional[Resource]:
        return self._snapshot.catalog.get(resource_id)

    def get_catalog(self) -> Mapping[str, Resource]:
        return self._snapshot.catalog

    def get_org_drives(self) -> Mapping[str, Mapping[str, str]]:
        return self._snapshot.org_drives

    def get_tagged(
        self,
        tag: Optional[str] = None,
    ) -> Union[list[str], Mapping[str, tuple[str, ...]]]:
        """Ids tagged `tag`, or the whole tag index when no tag is given."""
        if tag:
            return list(self._snapshot.tag_index.get(tag, ()))
        return self._snapshot.tag_index

    def get_children(self, resource_id: str) -> Optional[AdjacencyEntry]:
        return self._snapshot.adjacency.get(resource_id)

    def get_all_routes(self) -> set[str]:
        return {
            r.path
            for r in self._snapshot.catalog.values()
            if r.path and r.path.startswith("/")
        }

    def get_playlist(self, spreadsheet_id: str) -> list[str]:
        """
        Document ids listed in a playlist spreadsheet.

        The first column holds one Drive link per row under a header row;
        results are cached per spreadsheet for the life of the process.
        """
        if spreadsheet_id in self._playlists:
            return self._playlists[spreadsheet_id]

        links = self._controller.get_sheet_column(spreadsheet_id, PLAYLIST_RANGE)
        ids = [doc_id for doc_id in map(_doc_id_from_link, links[1:]) if doc_id]
        self._playlists[spreadsheet_id] = ids
        return ids


def _doc_id_from_link(link: Any) -> Optional[str]:
    # https://docs.google.com/document/d/<id>/edit -> <id>
    parts = urlparse(str(link)).path.split("/")
    return parts[3] if len(parts) > 3 and parts[3] else None
