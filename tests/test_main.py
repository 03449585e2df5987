import unittest
from unittest.mock import Mock, patch

from typer.testing import CliRunner

from drivelibrary.__main__ import app
from drivelibrary.errors import NetworkError


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self.runner = CliRunner()
        self.library = Mock()
        self.settings = Mock(log_level="INFO", log_file=None, refresh_interval=15.0)

        patches = [
            patch("drivelibrary.__main__.get_settings", return_value=self.settings),
            patch("drivelibrary.__main__.setup_logging"),
            patch("drivelibrary.__main__.DriveLibrary", return_value=self.library),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)

    def test_routes_are_sorted(self) -> None:
        self.library.get_all_routes.return_value = {"/b", "/a"}

        result = self.runner.invoke(app, ["routes"])

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.stdout.splitlines(), ["/a", "/b"])
        self.library.refresh.assert_called_once_with()

    def test_tags_for_one_tag(self) -> None:
        self.library.get_tagged.return_value = ["X", "Y"]

        result = self.runner.invoke(app, ["tags", "guide"])

        self.library.get_tagged.assert_called_once_with("guide")
        self.assertEqual(result.stdout.splitlines(), ["X", "Y"])

    def test_tag_index_summary(self) -> None:
        self.library.get_tagged.return_value = {"guide": ("X", "Y"), "api": ("Z",)}

        result = self.runner.invoke(app, ["tags"])

        self.assertEqual(result.stdout.splitlines(), ["api\t1", "guide\t2"])

    def test_refresh_failure_exits_non_zero(self) -> None:
        self.library.refresh.side_effect = NetworkError("offline")

        result = self.runner.invoke(app, ["routes"])

        self.assertEqual(result.exit_code, 1)

    def test_verbose_sets_debug_logging(self) -> None:
        self.library.get_all_routes.return_value = set()
        with patch("drivelibrary.__main__.setup_logging") as setup:
            self.runner.invoke(app, ["-v", "routes"])
        setup.assert_called_once_with(level="DEBUG", log_file=None)

    def test_watch_stops_on_interrupt(self) -> None:
        with patch("drivelibrary.__main__.time.sleep", side_effect=KeyboardInterrupt):
            result = self.runner.invoke(app, ["watch"])

        self.assertEqual(result.exit_code, 0)
        self.library.start.assert_called_once_with()
        self.library.stop.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
