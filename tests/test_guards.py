"""Unit tests for the auth guard functions in app.api.guards."""

import unittest
from unittest.mock import MagicMock, patch

from app.api.guards import check_access, check_credentials, check_refresh, member_guard
from app.core.exceptions import (
    TokenInvalid,
    TokenTypeMismatch,
    Unauthorized,
    Unregistered,
)
from app.core.security import PasswordHasher
from app.core.tokens import TokenService
from app.schemas.auth import Identity
from support import make_settings


class TestAccessGuard(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(make_settings())
        self.identity = Identity(account_id=7, username="bob", role="user")

    def test_no_token_is_anonymous(self) -> None:
        for token in (None, ""):
            identity = check_access(token, self.tokens)
            self.assertFalse(identity.is_authenticated)
            self.assertIsNone(identity.account_id)

    def test_valid_access_token_yields_identity(self) -> None:
        token, _ = self.tokens.issue_access_token(self.identity)
        self.assertEqual(check_access(token, self.tokens), self.identity)

    def test_bad_token_is_not_downgraded_to_anonymous(self) -> None:
        with self.assertRaises(TokenInvalid):
            check_access("garbage", self.tokens)

    def test_refresh_token_rejected(self) -> None:
        with self.assertRaises(TokenTypeMismatch):
            check_access(self.tokens.issue_refresh_token(self.identity), self.tokens)

    def test_member_guard_rejects_anonymous(self) -> None:
        with self.assertRaises(Unregistered):
            member_guard(Identity.anonymous())
        self.assertEqual(member_guard(self.identity), self.identity)


class TestRefreshGuard(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(make_settings())
        self.identity = Identity(account_id=7, username="bob", role="user")

    def test_missing_cookie_is_unauthorized(self) -> None:
        with self.assertRaises(Unauthorized):
            check_refresh(None, self.tokens)

    def test_refresh_token_yields_claims(self) -> None:
        claims = check_refresh(self.tokens.issue_refresh_token(self.identity), self.tokens)
        self.assertEqual(claims.account_id, 7)
        self.assertEqual(claims.type, "refresh")

    def test_access_token_rejected(self) -> None:
        token, _ = self.tokens.issue_access_token(self.identity)
        with self.assertRaises(TokenTypeMismatch):
            check_refresh(token, self.tokens)


class TestLocalGuard(unittest.TestCase):
    def setUp(self) -> None:
        self.hasher = PasswordHasher(rounds=4)
        self.account = MagicMock()
        self.account.password_hash = self.hasher.hash("correct-horse-battery")
        self.account.activated = True
        self.session = MagicMock()

    @patch("app.api.guards.get_account_by_username")
    def test_valid_credentials_return_account(self, mock_lookup: MagicMock) -> None:
        mock_lookup.return_value = self.account
        account = check_credentials(self.session, self.hasher, "bob", "correct-horse-battery")
        self.assertIs(account, self.account)
        mock_lookup.assert_called_once_with(self.session, "bob")

    @patch("app.api.guards.get_account_by_username")
    def test_wrong_password(self, mock_lookup: MagicMock) -> None:
        mock_lookup.return_value = self.account
        with self.assertRaises(Unauthorized):
            check_credentials(self.session, self.hasher, "bob", "wrong-password")

    @patch("app.api.guards.get_account_by_username")
    def test_unknown_user_gets_same_message(self, mock_lookup: MagicMock) -> None:
        mock_lookup.return_value = None
        with self.assertRaises(Unauthorized) as unknown:
            check_credentials(self.session, self.hasher, "nobody", "whatever")
        mock_lookup.return_value = self.account
        with self.assertRaises(Unauthorized) as wrong:
            check_credentials(self.session, self.hasher, "bob", "wrong-password")
        self.assertEqual(unknown.exception.message, wrong.exception.message)

    @patch("app.api.guards.get_account_by_username")
    def test_inactive_account_rejected(self, mock_lookup: MagicMock) -> None:
        self.account.activated = False
        mock_lookup.return_value = self.account
        with self.assertRaises(Unauthorized):
            check_credentials(self.session, self.hasher, "bob", "correct-horse-battery")


if __name__ == "__main__":
    unittest.main()
