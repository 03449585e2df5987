import unittest

import drivelibrary


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(drivelibrary, "DriveLibrary"))
        self.assertTrue(hasattr(drivelibrary, "SearchService"))
        self.assertTrue(hasattr(drivelibrary, "Settings"))
        self.assertTrue(hasattr(drivelibrary, "AuthInfo"))

        self.assertTrue(hasattr(drivelibrary, "TreeBuilder"))
        self.assertTrue(hasattr(drivelibrary, "Snapshot"))
        self.assertTrue(hasattr(drivelibrary, "Resource"))
        self.assertTrue(hasattr(drivelibrary, "PurgeInstruction"))

        self.assertTrue(hasattr(drivelibrary, "DriveLibraryError"))
        self.assertTrue(hasattr(drivelibrary, "CatalogContractError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(drivelibrary, "__all__"))
        self.assertIn("DriveLibrary", drivelibrary.__all__)
        self.assertIn("DriveLibraryError", drivelibrary.__all__)
        for name in drivelibrary.__all__:
            self.assertTrue(hasattr(drivelibrary, name), name)


if __name__ == "__main__":
    unittest.main()
