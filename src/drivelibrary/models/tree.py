"""Navigation tree and snapshot models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal, Optional

from .resource import Resource

NodeType = Literal["branch", "leaf"]


@dataclass(slots=True, frozen=True)
class AdjacencyEntry:
    """Children of one parent, in listing order, plus its home file (if any)."""

    children: tuple[str, ...] = ()
    home: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Crumb:
    id: str
    slug: Optional[str]


@dataclass(slots=True, frozen=True)
class TreeNode:
    """
    One node of a drive's navigation tree.

    `children` is keyed by child slug and is empty for leaves.
    """

    node_type: NodeType
    id: str
    breadcrumb: tuple[Crumb, ...]
    home: Optional[str] = None
    sort: Optional[str] = None
    children: Mapping[str, TreeNode] = field(default_factory=dict)

    @property
    def is_branch(self) -> bool:
        return self.node_type == "branch"


@dataclass(slots=True, frozen=True)
class Snapshot:
    """
    Complete derived state of one rebuild. Never mutated after publishing.

    Attributes:
        catalog: id -> enriched Resource.
        adjacency: parent id -> AdjacencyEntry.
        trees: one root TreeNode per drive root, in root order.
        tag_index: tag -> ids in first-seen order.
        root_ids: the drive roots the trees were built from.
        org_drives: shared drives by id (org mode only).
    """

    catalog: Mapping[str, Resource] = field(default_factory=dict)
    adjacency: Mapping[str, AdjacencyEntry] = field(default_factory=dict)
    trees: tuple[TreeNode, ...] = ()
    tag_index: Mapping[str, tuple[str, ...]] = field(default_factory=dict)
    root_ids: tuple[str, ...] = ()
    org_drives: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.adjacency

    def file_count(self) -> int:
        return sum(1 for r in self.catalog.values() if r.resource_type != "folder")


EMPTY_SNAPSHOT = Snapshot()
