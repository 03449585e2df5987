import unittest

from drivelibrary.cache import CacheClient, LoggingCacheClient


class TestLoggingCacheClient(unittest.TestCase):
    def test_satisfies_protocol(self) -> None:
        self.assertIsInstance(LoggingCacheClient(), CacheClient)

    def test_logs_at_debug(self) -> None:
        client = LoggingCacheClient()
        with self.assertLogs("drivelibrary.cache.client", level="DEBUG") as logs:
            client.purge(url="/a", modified="m", edit_email="itemAdded", ignore=("missing",))
            client.redirect("/a", "/b")

        self.assertEqual([r.levelname for r in logs.records], ["DEBUG", "DEBUG"])
        self.assertIn("/a", logs.output[0])
        self.assertIn("/b", logs.output[1])


if __name__ == "__main__":
    unittest.main()
