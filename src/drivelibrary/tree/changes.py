"""Change detection between snapshots and cache notification."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Literal, Optional

from drivelibrary.cache import CacheClient
from drivelibrary.models import (
    AdjacencyEntry,
    CacheInstruction,
    PurgeInstruction,
    RedirectInstruction,
    Resource,
    Snapshot,
)
from drivelibrary.util.log import get_logger

logger = get_logger(__name__)

TRASH_IGNORE: tuple[str, ...] = ("missing", "modified")

CacheErrorKind = Literal["duplicate", "not_found", "other"]


def _is_trashed(resource: Optional[Resource]) -> bool:
    # Missing counts as trashed: the item left the drive (or never existed).
    return resource is None or resource.is_trashed


class ChangeDetector:
    """
    Compare the children of each visited node against the previous snapshot
    and collect the cache instructions the differences call for.

    Per child (current and previous children and home ids, deduplicated):
        - exactly one side missing or under /trash -> purge of the visible
          side tagged itemAdded/itemRemoved (never on the first rebuild)
        - child is a folder with a home file -> nothing
        - path changed -> redirect old -> new
        - otherwise -> purge of the current path

    Instructions are kept in first-emitted order without duplicates.
    """

    def __init__(
        self,
        catalog: Mapping[str, Resource],
        adjacency: Mapping[str, AdjacencyEntry],
        previous: Snapshot,
    ) -> None:
        self._catalog = catalog
        self._adjacency = adjacency
        self._previous = previous
        self._first_run = previous.is_empty
        self._instructions: dict[CacheInstruction, None] = {}

    @property
    def instructions(self) -> list[CacheInstruction]:
        return list(self._instructions)

    def inspect(self, node_id: str) -> None:
        for child_id in self._affected_ids(node_id):
            instruction = self._compare(
                self._catalog.get(child_id),
                self._previous.catalog.get(child_id),
            )
            if instruction is not None:
                self._instructions.setdefault(instruction, None)

    def _affected_ids(self, node_id: str) -> list[str]:
        current = self._adjacency.get(node_id) or AdjacencyEntry()
        last = self._previous.adjacency.get(node_id) or AdjacencyEntry()

        ids: dict[str, None] = {}
        for entry in (current, last):
            for child_id in entry.children:
                ids.setdefault(child_id, None)
        for entry in (current, last):
            if entry.home:
                ids.setdefault(entry.home, None)
        return list(ids)

    def _compare(
        self,
        new: Optional[Resource],
        old: Optional[Resource],
    ) -> Optional[CacheInstruction]:
        new_trashed = _is_trashed(new)
        old_trashed = _is_trashed(old)

        if not self._first_run and (new_trashed or old_trashed):
            if new_trashed == old_trashed:
                return None
            visible = new if old_trashed else old
            if visible is None or visible.path is None:
                return None
            return PurgeInstruction(
                url=visible.path,
                modified=visible.modified_time,
                edit_email="itemAdded" if old_trashed else "itemRemoved",
                ignore=TRASH_IGNORE,
            )

        if new is None or new.path is None:
            return None

        # Folders with a home file are refreshed through the home file itself.
        entry = self._adjacency.get(new.id)
        if entry is not None and entry.home:
            return None

        if old is not None and old.path is not None and old.path != new.path:
            return RedirectInstruction(old.path, new.path, new.modified_time)

        return PurgeInstruction(url=new.path, modified=new.modified_time)


def classify_cache_error(exc: BaseException) -> CacheErrorKind:
    message = str(exc)
    if "Same purge id as previous" in message:
        return "duplicate"
    if "Not found" in message or "No purge of fresh content" in message:
        return "not_found"
    return "other"


class CacheNotifier:
    """
    Send cache instructions to the downstream cache.

    Failures never propagate: duplicates are logged at debug level, missing or
    already-fresh content is ignored, anything else is a warning.
    """

    def __init__(self, client: CacheClient) -> None:
        self._client = client

    def dispatch(self, instructions: Iterable[CacheInstruction]) -> int:
        """Send every instruction; return how many the cache accepted."""
        accepted = 0
        for instruction in instructions:
            if isinstance(instruction, RedirectInstruction):
                accepted += self._redirect(instruction)
            else:
                accepted += self._purge(instruction)
        return accepted

    def _redirect(self, instruction: RedirectInstruction) -> bool:
        try:
            self._client.redirect(
                instruction.old_url,
                instruction.new_url,
                instruction.modified,
            )
        except Exception as exc:
            logger.warning(
                "Cache redirect error for %s -> %s: %s",
                instruction.old_url,
                instruction.new_url,
                exc,
            )
            return False
        return True

    def _purge(self, instruction: PurgeInstruction) -> bool:
        try:
            self._client.purge(
                url=instruction.url,
                modified=instruction.modified,
                edit_email=instruction.edit_email,
                ignore=instruction.ignore,
            )
        except Exception as exc:
            self._log_purge_error(instruction, exc)
            return False
        return True

    def _log_purge_error(self, instruction: PurgeInstruction, exc: Exception) -> None:
        if instruction.ignore:
            logger.debug("Error purging trashed item cache for %s: %s", instruction.url, exc)
            return

        kind = classify_cache_error(exc)
        if kind == "duplicate":
            logger.debug("Ignoring duplicate cache purge for %s: %s", instruction.url, exc)
        elif kind == "other":
            logger.warning("Cache purging error for %s: %s", instruction.url, exc)
