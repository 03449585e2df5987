"""Drive listing controller exports for drivelibrary."""

from __future__ import annotations

from .drive_controller import DriveListingController, ListPage

__all__ = ["DriveListingController", "ListPage"]
