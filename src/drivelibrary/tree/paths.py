"""Canonical site paths for cataloged resources."""

from __future__ import annotations

import posixpath
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Any, Optional

from drivelibrary.catalog import clean_slug
from drivelibrary.models import Resource
from drivelibrary.util.log import get_logger
from drivelibrary.util.mime import ORG, TEAM_DRIVE

logger = get_logger(__name__)


class _ParentCycle(Exception):
    def __init__(self, start_id: str) -> None:
        super().__init__(start_id)
        self.start_id = start_id


class PathResolver:
    """
    Resolve `path`, `folder` and `top_level_folder` for every resource.

    Rules:
        - The primary parent is `parents[0]`. A parent that is one of the drive
          roots does not count: such resources sit at the drive's base path,
          "/" or, in org mode, "/<drive-slug>".
        - A home file takes its folder's path; anything else appends its slug.
        - Types the site cannot render get their Drive view link instead.
        - The trash folder and everything under it are flagged `in_trash`,
          whatever the drive prefix of their path.
        - A parent id missing from the catalog, or a parent cycle, leaves the
          resource unresolved (path None) with a warning.

    Results are memoized for the lifetime of the resolver, which is one
    rebuild.
    """

    def __init__(
        self,
        catalog: Mapping[str, Resource],
        root_ids: Sequence[str],
        *,
        drive_type: str = "team",
        org_drives: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        self._catalog = catalog
        self._root_ids = frozenset(root_ids)
        self._drive_type = drive_type
        self._org_drives = org_drives or {}
        self._memo: dict[str, Optional[Resource]] = {}
        self._resolving: list[str] = []

    def resolve_all(self) -> dict[str, Resource]:
        """Return a new catalog with path information filled in."""
        enriched: dict[str, Resource] = {}
        for resource_id, resource in self._catalog.items():
            resolved = self.resolve(resource_id)
            enriched[resource_id] = resolved if resolved is not None else resource
        return enriched

    def resolve(self, resource_id: str) -> Optional[Resource]:
        """Return the enriched resource, or None if its path cannot be derived."""
        if resource_id in self._memo:
            return self._memo[resource_id]

        if resource_id in self._resolving:
            raise _ParentCycle(resource_id)

        self._resolving.append(resource_id)
        try:
            resolved = self._derive(self._catalog[resource_id])
        except _ParentCycle as cycle:
            resolved = None
            if cycle.start_id != resource_id:
                self._memo[resource_id] = None
                raise
            logger.warning(
                "Parent cycle through %s (%s); leaving path unresolved",
                self._catalog[resource_id].name,
                resource_id,
            )
        finally:
            self._resolving.pop()

        self._memo[resource_id] = resolved
        return resolved

    def _derive(self, resource: Resource) -> Optional[Resource]:
        if resource.resource_type == ORG:
            return replace(resource, path="/")
        if resource.resource_type == TEAM_DRIVE:
            return replace(resource, path=f"/{resource.slug}")

        parent_id = resource.parents[0] if resource.parents else None
        has_parent = parent_id is not None and parent_id not in self._root_ids

        if has_parent and parent_id not in self._catalog:
            logger.warning(
                "Found file (%s) with parent (%s) but no parent info!",
                resource.name,
                parent_id,
            )
            return None

        folder: Optional[Resource] = None
        top_level_folder: Optional[Resource] = None
        if has_parent:
            folder = self.resolve(parent_id)  # type: ignore[arg-type]
            base_path = folder.path if folder is not None else None
            if folder is not None:
                top_level_folder = folder.top_level_folder or folder
        else:
            base_path = self._root_path(parent_id)
            if parent_id is not None and parent_id in self._catalog:
                folder = self.resolve(parent_id)

        if resource.is_home:
            library_path = base_path
        else:
            if base_path is None:
                base_path = f"/{resource.slug}"
            library_path = posixpath.join(base_path, resource.slug)

        in_trash = resource.is_trash_can or (
            has_parent and folder is not None and folder.in_trash
        )

        return replace(
            resource,
            path=library_path if resource.render_in_library else resource.web_view_link,
            folder=folder,
            top_level_folder=top_level_folder,
            in_trash=in_trash,
        )

    def _root_path(self, root_id: Optional[str]) -> str:
        if self._drive_type == "org" and root_id in self._org_drives:
            return "/" + clean_slug(str(self._org_drives[root_id].get("name", "")))
        return "/"
