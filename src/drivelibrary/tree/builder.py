"""Catalog and navigation tree construction from a flat Drive listing."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Optional

from drivelibrary.catalog import (
    TagIndex,
    clean_name,
    clean_slug,
    determine_sort,
    matches_home,
    parse_tags,
    slugify,
)
from drivelibrary.models import (
    EMPTY_SNAPSHOT,
    AdjacencyEntry,
    CacheInstruction,
    Crumb,
    RawResource,
    Resource,
    Snapshot,
    TreeNode,
)
from drivelibrary.util.log import get_logger
from drivelibrary.util.mime import ORG, TEAM_DRIVE, clean_resource_type

from .changes import ChangeDetector
from .paths import PathResolver

logger = get_logger(__name__)


@dataclass(slots=True)
class _Branch:
    children: list[str] = field(default_factory=list)
    home: Optional[str] = None


@dataclass(slots=True, frozen=True)
class BuildResult:
    snapshot: Snapshot
    instructions: list[CacheInstruction]


def catalog_entry(raw: RawResource, root_ids: Iterable[str]) -> Resource:
    """Derive the name-based fields of a resource."""
    pretty_name = clean_name(raw.name)
    slug = slugify(pretty_name)
    return Resource(
        id=raw.id,
        name=raw.name,
        mime_type=raw.mime_type,
        parents=raw.parents,
        pretty_name=pretty_name,
        slug=slug,
        resource_type=clean_resource_type(raw.mime_type),
        sort=determine_sort(raw.name),
        tags=parse_tags(raw.name),
        is_trash_can=slug == "trash" and any(p in raw.parents for p in root_ids),
        web_view_link=raw.web_view_link,
        created_time=raw.created_time,
        modified_time=raw.modified_time,
        last_modifying_user=raw.last_modifying_user,
    )


class TreeBuilder:
    """
    Build a Snapshot from the resources listed under each drive root.

    Usage:
        builder = TreeBuilder(drive_type="team")
        result = builder.build({drive_id: resources}, previous=current_snapshot)

    The previous snapshot is only read, to compute cache instructions.
    """

    def __init__(
        self,
        *,
        drive_type: str = "team",
        org_name: Optional[str] = None,
        org_drives: Optional[Mapping[str, Mapping[str, Any]]] = None,
    ) -> None:
        if drive_type == "org" and not org_name:
            raise ValueError("org_name is required when drive_type is 'org'")
        self._drive_type = drive_type
        self._org_name = org_name
        self._org_drives = dict(org_drives or {})

    def build(
        self,
        files_by_root: Mapping[str, Sequence[RawResource]],
        previous: Snapshot = EMPTY_SNAPSHOT,
    ) -> BuildResult:
        root_ids = tuple(files_by_root)
        catalog, branches, tags = self._index(files_by_root, root_ids)

        if self._drive_type == "org":
            self._add_org_resources(root_ids, catalog, branches)

        resolver = PathResolver(
            catalog,
            root_ids,
            drive_type=self._drive_type,
            org_drives=self._org_drives,
        )
        catalog = resolver.resolve_all()
        adjacency = {
            parent_id: AdjacencyEntry(children=tuple(b.children), home=b.home)
            for parent_id, b in branches.items()
        }

        detector = ChangeDetector(catalog, adjacency, previous)
        assembler = _TreeAssembler(catalog, adjacency, detector, self._root_slugs(catalog))
        trees = tuple(assembler.assemble(root_id) for root_id in root_ids)

        snapshot = Snapshot(
            catalog=catalog,
            adjacency=adjacency,
            trees=trees,
            tag_index=tags.freeze(),
            root_ids=root_ids,
            org_drives=self._org_drives,
        )
        return BuildResult(snapshot=snapshot, instructions=detector.instructions)

    # ----------------------------
    # Internals
    # ----------------------------
    def _index(
        self,
        files_by_root: Mapping[str, Sequence[RawResource]],
        root_ids: Sequence[str],
    ) -> tuple[dict[str, Resource], dict[str, _Branch], TagIndex]:
        catalog: dict[str, Resource] = {}
        branches: dict[str, _Branch] = {}
        tags = TagIndex()

        for resources in files_by_root.values():
            for raw in resources:
                resource = catalog_entry(raw, root_ids)
                catalog[raw.id] = resource
                tags.add(raw.id, resource.tags)

                # First home-marked file per parent becomes its index page.
                home_candidate = matches_home(raw.name)
                for parent_id in raw.parents:
                    branch = branches.setdefault(parent_id, _Branch())
                    if raw.id in branch.children or branch.home == raw.id:
                        continue
                    if home_candidate and branch.home is None:
                        branch.home = raw.id
                        catalog[raw.id] = replace(catalog[raw.id], is_home=True)
                    else:
                        branch.children.append(raw.id)

        return catalog, branches, tags

    def _add_org_resources(
        self,
        root_ids: Sequence[str],
        catalog: dict[str, Resource],
        branches: dict[str, _Branch],
    ) -> None:
        org_name = str(self._org_name)
        catalog[org_name] = Resource(
            id=org_name,
            name=org_name,
            mime_type=ORG,
            parents=(),
            pretty_name=org_name,
            slug=slugify(org_name),
            resource_type=ORG,
            sort=determine_sort(),
        )

        org_branch = _Branch()
        for drive_id in root_ids:
            drive = self._org_drives.get(drive_id)
            if drive is None:
                continue
            name = str(drive.get("name", ""))
            org_branch.children.append(drive_id)
            catalog[drive_id] = Resource(
                id=drive_id,
                name=name,
                mime_type=TEAM_DRIVE,
                parents=(org_name,),
                pretty_name=name,
                slug=clean_slug(name),
                resource_type=TEAM_DRIVE,
                sort=determine_sort(),
            )
        branches[org_name] = org_branch

    def _root_slugs(self, catalog: Mapping[str, Resource]) -> dict[str, Optional[str]]:
        if self._drive_type == "org":
            return {
                drive_id: clean_slug(str(drive.get("name", "")))
                for drive_id, drive in self._org_drives.items()
            }
        return {rid: r.slug for rid, r in catalog.items()}


class _TreeAssembler:
    """Recursive node assembly; runs change detection on every visited node."""

    def __init__(
        self,
        catalog: Mapping[str, Resource],
        adjacency: Mapping[str, AdjacencyEntry],
        detector: ChangeDetector,
        root_slugs: Mapping[str, Optional[str]],
    ) -> None:
        self._catalog = catalog
        self._adjacency = adjacency
        self._detector = detector
        self._root_slugs = root_slugs

    def assemble(self, root_id: str) -> TreeNode:
        logger.debug("Assembling tree for root %s", root_id)
        crumb = Crumb(id=root_id, slug=self._root_slugs.get(root_id))
        return self._node(root_id, (crumb,), ancestors=frozenset())

    def _node(
        self,
        node_id: str,
        breadcrumb: tuple[Crumb, ...],
        ancestors: frozenset[str],
    ) -> TreeNode:
        entry = self._adjacency.get(node_id)
        info = self._catalog.get(node_id)

        # Items in the trash never produce purges or redirects of their own.
        if info is None or not info.is_trash_can:
            self._detector.inspect(node_id)

        sort = info.sort if info is not None else None
        if entry is None:
            return TreeNode(node_type="leaf", id=node_id, breadcrumb=breadcrumb, sort=sort)

        if ancestors:
            child_crumbs = breadcrumb + (Crumb(node_id, info.slug if info else None),)
        else:
            child_crumbs = breadcrumb
        lineage = ancestors | {node_id}

        children: dict[str, TreeNode] = {}
        for child_id in entry.children:
            if child_id in lineage:
                logger.warning("Skipping %s under %s: parent cycle", child_id, node_id)
                continue

            child = self._catalog[child_id]
            node = self._node(child_id, child_crumbs, lineage)
            if child.slug in children:
                logger.warning(
                    "Duplicate slug %r under %s; %s is not reachable by path",
                    child.slug,
                    node_id,
                    child_id,
                )
                continue
            children[child.slug] = node

        return TreeNode(
            node_type="branch",
            id=node_id,
            breadcrumb=breadcrumb,
            home=entry.home,
            sort=sort,
            children=children,
        )
