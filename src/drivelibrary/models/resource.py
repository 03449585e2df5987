"""Data model for Drive resources (files, folders, drives)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from drivelibrary.errors import CatalogContractError
from drivelibrary.util.mime import is_supported

_REQUIRED_FIELDS: tuple[str, ...] = ("id", "name", "parents")


@dataclass(slots=True, frozen=True)
class RawResource:
    """
    A file/folder record exactly as the listing service returned it.

    Timestamps and the last modifying user are passed through untouched.
    """

    id: str
    name: str
    mime_type: str
    parents: tuple[str, ...]

    web_view_link: Optional[str] = None
    created_time: Optional[str] = None
    modified_time: Optional[str] = None
    last_modifying_user: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> RawResource:
        """
        Build from a Drive v3 `files` entry.

        Raises:
            CatalogContractError: if id, name or parents is missing.
        """
        missing = [key for key in _REQUIRED_FIELDS if data.get(key) is None]
        if missing:
            raise CatalogContractError(
                "Listed resource is missing required fields",
                details={"id": data.get("id"), "missing": missing},
            )

        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            mime_type=str(data.get("mimeType") or ""),
            parents=tuple(data["parents"]),
            web_view_link=data.get("webViewLink"),
            created_time=data.get("createdTime"),
            modified_time=data.get("modifiedTime"),
            last_modifying_user=dict(data.get("lastModifyingUser") or {}),
        )


@dataclass(slots=True, frozen=True)
class Resource:
    """
    A cataloged resource: the raw record plus everything derived from its name
    and position in the tree.

    Notes:
        - `path` is None until resolved, and stays None when resolution fails
          (dangling parent, cycle).
        - For types the site cannot render, `path` is the Drive view link.
        - `folder` is the primary parent with its own path filled in;
          `top_level_folder` is the first ancestor sitting directly in a drive.
        - `in_trash` is set by path resolution for the trash folder and every
          resource whose primary-parent chain passes through it.
    """

    id: str
    name: str
    mime_type: str
    parents: tuple[str, ...]

    pretty_name: str
    slug: str
    resource_type: str
    sort: str
    tags: tuple[str, ...] = ()
    is_trash_can: bool = False
    is_home: bool = False
    in_trash: bool = False

    web_view_link: Optional[str] = None
    created_time: Optional[str] = None
    modified_time: Optional[str] = None
    last_modifying_user: Mapping[str, Any] = field(default_factory=dict)

    path: Optional[str] = None
    folder: Optional[Resource] = None
    top_level_folder: Optional[Resource] = None

    @property
    def render_in_library(self) -> bool:
        return is_supported(self.resource_type) or "playlist" in self.tags

    @property
    def is_hidden(self) -> bool:
        return "hidden" in self.tags

    @property
    def is_trashed(self) -> bool:
        """True for a drive's trash folder and everything beneath it."""
        return self.in_trash
