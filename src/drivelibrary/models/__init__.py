"""Public model exports for drivelibrary."""

from __future__ import annotations

from .instructions import CacheInstruction, PurgeInstruction, RedirectInstruction
from .resource import RawResource, Resource
from .tree import EMPTY_SNAPSHOT, AdjacencyEntry, Crumb, NodeType, Snapshot, TreeNode

__all__ = [
    "RawResource",
    "Resource",
    "AdjacencyEntry",
    "Crumb",
    "NodeType",
    "TreeNode",
    "Snapshot",
    "EMPTY_SNAPSHOT",
    "CacheInstruction",
    "PurgeInstruction",
    "RedirectInstruction",
]
