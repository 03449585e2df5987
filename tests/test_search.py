import os
import unittest
from unittest.mock import patch

from drivelibrary.config import Settings
from drivelibrary.errors import NetworkError
from drivelibrary.library import DriveLibrary
from drivelibrary.models import RawResource
from drivelibrary.search import SearchService
from drivelibrary.util.mime import FOLDER_MIME

DOC = "application/vnd.google-apps.document"


def raw(id, name, parents, mime=DOC) -> RawResource:
    return RawResource(id=id, name=name, mime_type=mime, parents=tuple(parents))


class FakeController:
    def __init__(self, files_by_drive, drives=None, hits=None) -> None:
        self.files_by_drive = files_by_drive
        self.drives = drives or []
        self.hits = hits or []
        self.error = None
        self.calls = []

    def fetch_all_files(self, parent_ids, *, drive_type="team"):
        return list(self.files_by_drive[parent_ids[0]])

    def list_drives(self):
        return list(self.drives)

    def list_folder_ids(self, root_id):
        self.calls.append(("list_folder_ids", root_id))
        return [root_id, "SUB"]

    def search(self, query, *, drive_type="team", folder_ids=None, drive_id=None):
        self.calls.append(("search", query, drive_type, tuple(folder_ids or ()), drive_id))
        if self.error is not None:
            raise self.error
        return list(self.hits)


def library_for(controller, **settings) -> DriveLibrary:
    with patch.dict(os.environ, {}, clear=True):
        config = Settings(_env_file=None, **settings)
    library = DriveLibrary.from_controller(controller, config)
    library.refresh()
    return library


class TestSearchService(unittest.TestCase):
    def setUp(self) -> None:
        self.files = [
            raw("T", "Trash", ["D1"], FOLDER_MIME),
            raw("A", "Alpha", ["D1"]),
            raw("B", "Beta | hidden", ["D1"]),
            raw("C", "Gamma", ["T"]),
        ]

    def test_filters_unknown_trashed_and_hidden(self) -> None:
        controller = FakeController(
            {"D1": self.files},
            hits=[{"id": "A"}, {"id": "B"}, {"id": "C"}, {"id": "ZZZ"}],
        )
        library = library_for(controller, drive_id="D1")

        results = SearchService(library).run("alpha")

        self.assertEqual([r.id for r in results], ["A"])
        self.assertEqual(results[0].path, "/alpha")
        self.assertIn(("search", "alpha", "team", (), "D1"), controller.calls)

    def test_folder_mode_searches_every_folder(self) -> None:
        controller = FakeController({"P": [raw("A", "Alpha", ["P"])]}, hits=[{"id": "A"}])
        library = library_for(controller, drive_type="folder", drive_id="P")

        SearchService(library).run("x")

        self.assertEqual(
            controller.calls,
            [("list_folder_ids", "P"), ("search", "x", "folder", ("P", "SUB"), None)],
        )

    def test_org_mode_searches_each_drive(self) -> None:
        controller = FakeController(
            {"D1": [raw("A", "Alpha", ["D1"])], "D2": [raw("B", "Beta", ["D2"])]},
            drives=[{"id": "D1", "name": "One"}, {"id": "D2", "name": "Two"}],
            hits=[{"id": "A"}],
        )
        library = library_for(controller, drive_type="org", drive_org_name="Acme")

        results = SearchService(library).run("x")

        drive_ids = [c[4] for c in controller.calls if c[0] == "search"]
        self.assertEqual(drive_ids, ["D1", "D2"])
        self.assertEqual([r.id for r in results], ["A", "A"])

    def test_org_mode_drops_items_in_a_drive_trash(self) -> None:
        controller = FakeController(
            {
                "D1": [
                    raw("T", "Trash", ["D1"], FOLDER_MIME),
                    raw("A", "Alpha", ["D1"]),
                    raw("C", "Gamma", ["T"]),
                ]
            },
            drives=[{"id": "D1", "name": "Docs"}],
            hits=[{"id": "A"}, {"id": "C"}],
        )
        library = library_for(controller, drive_type="org", drive_org_name="Acme")

        results = SearchService(library).run("x")

        self.assertEqual([r.path for r in results], ["/docs/alpha"])

    def test_errors_are_logged_and_raised(self) -> None:
        controller = FakeController({"D1": self.files})
        controller.error = NetworkError("offline")
        library = library_for(controller, drive_id="D1")

        with self.assertLogs("drivelibrary.search", level="ERROR"):
            with self.assertRaises(NetworkError):
                SearchService(library).run("alpha")


if __name__ == "__main__":
    unittest.main()
