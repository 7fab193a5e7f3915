"""Unit tests for app.core.cookies: attributes of the refresh and registration cookies."""

import unittest

from fastapi import Request, Response

from app.core.cookies import SessionCookieManager
from app.core.tokens import ACTIVATION_TOKEN_MINUTES
from support import make_settings


def _request_with_cookie(header: str) -> Request:
    return Request({"type": "http", "headers": [(b"cookie", header.encode("latin-1"))]})


class TestRefreshCookie(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = make_settings()
        self.cookies = SessionCookieManager(self.settings)

    def test_set_is_http_only_and_scoped_to_api_root(self) -> None:
        response = Response()
        self.cookies.set_refresh_cookie(response, "tok")
        header = response.headers["set-cookie"]
        self.assertIn("refresh_token=tok", header)
        self.assertIn("HttpOnly", header)
        self.assertIn("Path=/api/v1", header)
        self.assertIn(f"Max-Age={self.settings.refresh_token_max_age}", header)
        self.assertIn("samesite=lax", header.lower())
        self.assertNotIn("Secure", header)

    def test_secure_flag_follows_settings(self) -> None:
        cookies = SessionCookieManager(make_settings(COOKIE_SECURE=True, COOKIE_SAMESITE="strict"))
        response = Response()
        cookies.set_refresh_cookie(response, "tok")
        header = response.headers["set-cookie"]
        self.assertIn("Secure", header)
        self.assertIn("samesite=strict", header.lower())

    def test_clear_expires_immediately(self) -> None:
        response = Response()
        self.cookies.clear_refresh_cookie(response)
        header = response.headers["set-cookie"]
        self.assertIn("refresh_token=", header)
        self.assertIn("Max-Age=0", header)
        self.assertIn("Path=/api/v1", header)

    def test_read_returns_value_or_none(self) -> None:
        self.assertEqual(
            self.cookies.read_refresh_cookie(_request_with_cookie("refresh_token=abc")), "abc"
        )
        self.assertIsNone(self.cookies.read_refresh_cookie(_request_with_cookie("other=1")))
        self.assertIsNone(self.cookies.read_refresh_cookie(_request_with_cookie("refresh_token=")))


class TestRegistrationCookie(unittest.TestCase):
    def test_set_uses_activation_lifetime(self) -> None:
        cookies = SessionCookieManager(make_settings())
        response = Response()
        cookies.set_registration_cookie(response, "pending")
        header = response.headers["set-cookie"]
        self.assertIn("registration_token=pending", header)
        self.assertIn(f"Max-Age={ACTIVATION_TOKEN_MINUTES * 60}", header)
        self.assertIn("HttpOnly", header)

    def test_read(self) -> None:
        cookies = SessionCookieManager(make_settings())
        request = _request_with_cookie("registration_token=pending; refresh_token=r")
        self.assertEqual(cookies.read_registration_cookie(request), "pending")


if __name__ == "__main__":
    unittest.main()
