"""Google Drive/Sheets API controller: read-only listing, search and export."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, TypeVar

from googleapiclient.errors import HttpError

from drivelibrary.auth import AuthInfo, CredentialsClient
from drivelibrary.errors import (
    ApiError,
    DriveLibraryError,
    HttpErrorInfo,
    InvalidStateError,
    NetworkError,
    is_retryable,
    map_http_error,
)
from drivelibrary.models import RawResource
from drivelibrary.util.log import get_logger
from drivelibrary.util.mime import FOLDER_MIME, HTML, PRESENTATION

from .fields import DRIVE_FIELDS, FOLDER_FIELDS, LIST_FIELDS, SEARCH_FIELDS

T = TypeVar("T")

logger = get_logger(__name__)


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


@dataclass(slots=True, frozen=True)
class ListPage:
    """One page of a files listing."""

    resources: list[RawResource]
    next_page_token: Optional[str] = None


class DriveListingController:
    """
    Read-only Drive API controller.

    Notes:
        - Pages are fetched sequentially; each request needs the previous
          page's token.
        - `drive_type` selects the query shape: "folder" lists children of
          the given folder ids, "team"/"org" list a whole shared drive.
    """

    DEFAULT_SCOPES: tuple[str, ...] = (
        "https://www.googleapis.com/auth/drive.readonly",
        "https://www.googleapis.com/auth/spreadsheets.readonly",
    )

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
    ) -> None:
        self._retry_policy = _RetryPolicy()

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = CredentialsClient(auth_info)
        self._service = client.build_service("drive", "v3", use_scopes)
        self._sheets = client.build_service("sheets", "v4", use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        sheets_service: Any = None,
    ) -> "DriveListingController":
        """Create controller from pre-built services (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy()
        obj._service = service
        obj._sheets = sheets_service
        return obj

    # ----------------------------
    # Listing
    # ----------------------------
    def list_page(
        self,
        parent_ids: Sequence[str],
        *,
        drive_type: str = "team",
        page_token: Optional[str] = None,
    ) -> ListPage:
        if drive_type == "folder":
            kwargs: dict[str, Any] = {"q": _parents_query(parent_ids)}
        else:
            kwargs = _shared_drive_kwargs(parent_ids[0])
            kwargs["q"] = "trashed = false"
            kwargs["pageSize"] = 1000

        req = self._service.files().list(
            fields=LIST_FIELDS,
            pageToken=page_token,
            **kwargs,
        )
        data = self._execute(req.execute)
        resources = [RawResource.from_api(f) for f in data.get("files", [])]
        return ListPage(resources=resources, next_page_token=data.get("nextPageToken"))

    def fetch_all_files(
        self,
        parent_ids: Sequence[str],
        *,
        drive_type: str = "team",
    ) -> list[RawResource]:
        """
        Drain every page under parent_ids.

        In "folder" mode the API only returns immediate children, so the
        listing repeats with the folders found one level down until no new
        folders turn up.
        """
        results: list[RawResource] = []
        searched: set[str] = set()
        pending = list(parent_ids)

        while pending:
            searched.update(pending)
            batch = self._drain(pending, drive_type)
            results.extend(batch)
            logger.debug("searching for files > %d", len(results))

            if drive_type != "folder":
                break

            pending = [
                r.id
                for r in batch
                if r.mime_type == FOLDER_MIME
                and r.parents
                and r.parents[0] in searched
                and r.id not in searched
            ]

        return results

    def list_drives(self) -> list[dict[str, str]]:
        """Shared drives visible to the credentials, as {id, name}."""
        drives: list[dict[str, str]] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.drives().list(fields=DRIVE_FIELDS, pageToken=page_token)
            data = self._execute(req.execute)
            for d in data.get("drives", []):
                drives.append({"id": d["id"], "name": d.get("name", "")})

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return drives

    def list_folder_ids(self, root_id: str) -> list[str]:
        """Ids of root_id and every folder beneath it (breadth-first)."""
        found: list[str] = [root_id]
        pending = [root_id]

        while pending:
            q = f"({_parents_query(pending)}) and mimeType = '{FOLDER_MIME}'"
            folders = self._drain_query(q, FOLDER_FIELDS, {})
            pending = [
                f["id"]
                for f in folders
                if f.get("parents") and f["parents"][0] in pending and f["id"] not in found
            ]
            found.extend(pending)

        return found

    # ----------------------------
    # Search
    # ----------------------------
    def search_page(
        self,
        query: str,
        *,
        drive_type: str = "team",
        folder_ids: Optional[Sequence[str]] = None,
        drive_id: Optional[str] = None,
        page_token: Optional[str] = None,
    ) -> tuple[list[dict[str, Any]], Optional[str]]:
        kwargs = self._search_kwargs(query, drive_type, folder_ids, drive_id)
        req = self._service.files().list(
            fields=SEARCH_FIELDS,
            pageToken=page_token,
            **kwargs,
        )
        data = self._execute(req.execute)
        return list(data.get("files", [])), data.get("nextPageToken")

    def search(
        self,
        query: str,
        *,
        drive_type: str = "team",
        folder_ids: Optional[Sequence[str]] = None,
        drive_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        kwargs = self._search_kwargs(query, drive_type, folder_ids, drive_id)
        q = kwargs.pop("q")
        return self._drain_query(q, SEARCH_FIELDS, kwargs)

    # ----------------------------
    # Content
    # ----------------------------
    def export_html(self, file_id: str, resource_type: str) -> str:
        """
        Raw HTML body of a document.

        Presentations only export as text; uploaded HTML files are downloaded
        as-is.
        """
        if resource_type == HTML:
            req = self._service.files().get_media(fileId=file_id, supportsAllDrives=True)
        else:
            mime_type = "text/plain" if resource_type == PRESENTATION else "text/html"
            req = self._service.files().export(fileId=file_id, mimeType=mime_type)

        data = self._execute(req.execute)
        if isinstance(data, (bytes, bytearray)):
            return data.decode("utf-8")
        return str(data)

    def get_sheet_column(self, spreadsheet_id: str, cell_range: str = "A1:A100") -> list[str]:
        """First cell of each row in cell_range."""
        if self._sheets is None:
            raise InvalidStateError("Sheets service is not configured")

        req = self._sheets.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=cell_range,
        )
        data = self._execute(req.execute)
        return [row[0] for row in data.get("values", []) if row]

    # ----------------------------
    # Internals
    # ----------------------------
    def _drain(self, parent_ids: Sequence[str], drive_type: str) -> list[RawResource]:
        results: list[RawResource] = []
        page_token: Optional[str] = None

        while True:
            page = self.list_page(parent_ids, drive_type=drive_type, page_token=page_token)
            results.extend(page.resources)

            page_token = page.next_page_token
            if not page_token:
                break

        return results

    def _drain_query(self, q: str, fields: str, kwargs: dict[str, Any]) -> list[dict[str, Any]]:
        files: list[dict[str, Any]] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(q=q, fields=fields, pageToken=page_token, **kwargs)
            data = self._execute(req.execute)
            files.extend(data.get("files", []))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        return files

    def _search_kwargs(
        self,
        query: str,
        drive_type: str,
        folder_ids: Optional[Sequence[str]],
        drive_id: Optional[str],
    ) -> dict[str, Any]:
        q = (
            f"fullText contains {json.dumps(query)}"
            f" and mimeType != '{FOLDER_MIME}' and trashed = false"
        )
        if drive_type == "folder":
            return {"q": f"({_parents_query(folder_ids or [])}) and {q}"}

        if not drive_id:
            raise InvalidStateError("drive_id is required to search a shared drive")
        kwargs = _shared_drive_kwargs(drive_id)
        kwargs["q"] = q
        return kwargs

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = self._map_exception(exc)
                if is_retryable(mapped) and attempt < self._retry_policy.max_retries:
                    logger.debug("Retrying Drive request in %.1fs: %s", delay, mapped)
                    time.sleep(delay)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError("Network error", cause=exc)

        if isinstance(exc, DriveLibraryError):
            return exc

        return ApiError("Drive API error", cause=exc)


def _parents_query(parent_ids: Sequence[str]) -> str:
    return " or ".join(f"'{pid}' in parents" for pid in parent_ids)


def _shared_drive_kwargs(drive_id: str) -> dict[str, Any]:
    return {
        "driveId": drive_id,
        "corpora": "drive",
        "supportsAllDrives": True,
        "includeItemsFromAllDrives": True,
    }


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = {}
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
