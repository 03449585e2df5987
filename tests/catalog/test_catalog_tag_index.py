import unittest

from drivelibrary.catalog import TagIndex


class TestTagIndex(unittest.TestCase):
    def test_first_seen_order_without_duplicates(self) -> None:
        index = TagIndex()
        index.add("B", ["team", "featured"])
        index.add("A", ["team"])
        index.add("B", ["team"])

        self.assertEqual(index.get("team"), ["B", "A"])
        self.assertEqual(index.get("featured"), ["B"])
        self.assertEqual(index.get("missing"), [])

    def test_freeze_returns_tuples(self) -> None:
        index = TagIndex()
        index.add("A", ["x"])
        frozen = index.freeze()

        index.add("B", ["x"])
        self.assertEqual(frozen, {"x": ("A",)})


if __name__ == "__main__":
    unittest.main()
