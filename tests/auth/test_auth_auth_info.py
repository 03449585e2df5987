import unittest

from drivelibrary.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_oauth(self) -> None:
        info = AuthInfo(
            kind="oauth",
            data={
                "credentials_file": "/tmp/client_secrets.json",
                "token_file": "/tmp/token.json",
            },
        )
        self.assertEqual(info.kind, "oauth")
        self.assertEqual(info.credentials_file, "/tmp/client_secrets.json")
        self.assertEqual(info.token_file, "/tmp/token.json")

    def test_auth_info_valid_service_account(self) -> None:
        info = AuthInfo(kind="service_account", data={"credentials_file": "/tmp/key.json"})
        self.assertEqual(info.credentials_file, "/tmp/key.json")
        self.assertIsNone(info.token_file)

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="api_key", data={"credentials_file": "x"})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"credentials_file": "x"})
        with self.assertRaises(ValueError):
            AuthInfo(kind="service_account", data={"credentials_file": "  "})

    def test_auth_info_data_must_be_dict(self) -> None:
        with self.assertRaises(TypeError):
            AuthInfo(kind="service_account", data=[("credentials_file", "x")])  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
