import unittest

from drivelibrary.errors import CatalogContractError
from drivelibrary.models import RawResource, Resource


def _resource(**overrides) -> Resource:
    values = dict(
        id="X",
        name="X",
        mime_type="application/vnd.google-apps.document",
        parents=("P",),
        pretty_name="X",
        slug="x",
        resource_type="document",
        sort="X",
    )
    values.update(overrides)
    return Resource(**values)


class TestRawResource(unittest.TestCase):
    def test_from_api_maps_fields(self) -> None:
        raw = RawResource.from_api(
            {
                "id": "F1",
                "name": "Doc",
                "mimeType": "application/vnd.google-apps.document",
                "parents": ["P1", "P2"],
                "webViewLink": "https://docs.google.com/document/d/F1/edit",
                "createdTime": "2025-01-01T00:00:00.000Z",
                "modifiedTime": "2025-01-02T00:00:00.000Z",
                "lastModifyingUser": {"displayName": "Ann"},
            }
        )
        self.assertEqual(raw.parents, ("P1", "P2"))
        self.assertEqual(raw.modified_time, "2025-01-02T00:00:00.000Z")
        self.assertEqual(raw.last_modifying_user["displayName"], "Ann")

    def test_from_api_requires_parents_and_name(self) -> None:
        with self.assertRaises(CatalogContractError) as ctx:
            RawResource.from_api({"id": "F1", "name": "Doc", "mimeType": "x"})
        self.assertEqual(ctx.exception.details["missing"], ["parents"])

        with self.assertRaises(CatalogContractError):
            RawResource.from_api({"id": "F1", "parents": [], "mimeType": "x"})


class TestResource(unittest.TestCase):
    def test_render_in_library(self) -> None:
        self.assertTrue(_resource().render_in_library)
        self.assertTrue(_resource(resource_type="folder").render_in_library)
        self.assertFalse(_resource(resource_type="application/pdf").render_in_library)
        self.assertTrue(
            _resource(resource_type="presentation", tags=("playlist",)).render_in_library
        )

    def test_is_trashed_and_hidden(self) -> None:
        self.assertTrue(_resource(in_trash=True).is_trashed)
        self.assertFalse(_resource(path="/trash/x").is_trashed)
        self.assertFalse(_resource().is_trashed)
        self.assertTrue(_resource(tags=("hidden",)).is_hidden)


if __name__ == "__main__":
    unittest.main()
