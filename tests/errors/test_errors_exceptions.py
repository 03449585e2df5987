import unittest

from drivelibrary.errors.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    DriveLibraryError,
    HttpErrorInfo,
    InvalidArgumentError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    is_retryable,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DriveLibraryError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, NotFoundError)
        self.assertEqual(err.details["status_code"], 404)

        err = map_http_error(HttpErrorInfo(status_code=400, message="bad req"))
        self.assertIsInstance(err, InvalidArgumentError)

        err = map_http_error(HttpErrorInfo(status_code=429, message="rate"))
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(HttpErrorInfo(status_code=412, message="conflict"))
        self.assertIsInstance(err, ConflictError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_403_variants(self) -> None:
        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="rateLimitExceeded", message="slow down")
        )
        self.assertIsInstance(err, RateLimitError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="userRateLimitExceeded", message="quota")
        )
        self.assertIsInstance(err, QuotaExceededError)

        err = map_http_error(
            HttpErrorInfo(status_code=403, reason="insufficientPermissions", message="x")
        )
        self.assertIsInstance(err, PermissionError)

    def test_map_http_error_other_is_api_error(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=503))
        self.assertIsInstance(err, ApiError)
        self.assertEqual(str(err), "HTTP error 503")

        err = map_http_error(HttpErrorInfo(status_code=418, message="teapot"))
        self.assertIsInstance(err, ApiError)

    def test_is_retryable(self) -> None:
        self.assertTrue(is_retryable(RateLimitError("slow")))
        self.assertTrue(is_retryable(map_http_error(HttpErrorInfo(status_code=502))))
        self.assertFalse(is_retryable(map_http_error(HttpErrorInfo(status_code=418))))
        self.assertFalse(is_retryable(NotFoundError("gone")))

    def test_all_errors_share_base(self) -> None:
        for cls in (ApiError, AuthError, NotFoundError, PermissionError):
            self.assertTrue(issubclass(cls, DriveLibraryError))


if __name__ == "__main__":
    unittest.main()
