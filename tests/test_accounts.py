"""Integration tests for app.services.accounts (registration, activation, profile)."""

import unittest
from unittest.mock import MagicMock

from app.core.exceptions import Conflict, PasswordMismatch, PermissionDenied, Unauthorized
from app.models import Account
from app.schemas.auth import RegisterRequest
from app.schemas.users import UpdateAccountRequest
from app.services import accounts
from support import TempDatabase, create_account

PASSWORD = "correct-horse-battery"


class AccountsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.db = TempDatabase()
        self.hasher = self.db.container.hasher
        self.session = self.db.session()

    def tearDown(self) -> None:
        self.session.close()
        self.db.close()


class TestRegistration(AccountsTestCase):
    def register(self, username: str = "carol", email: str = "carol@example.com", confirm: str = PASSWORD):
        body = RegisterRequest(
            email=email, username=username, password=PASSWORD, confirm_password=confirm
        )
        return accounts.register(self.session, self.hasher, body, 6)

    def test_register_creates_inactive_account_with_code(self) -> None:
        account = self.register()
        self.assertFalse(account.activated)
        self.assertEqual(len(account.activation_code), 6)
        self.assertTrue(self.hasher.verify(PASSWORD, account.password_hash))

    def test_confirm_mismatch(self) -> None:
        with self.assertRaises(PasswordMismatch):
            self.register(confirm="something-else")

    def test_duplicate_username_or_email(self) -> None:
        self.register()
        with self.assertRaises(Conflict):
            self.register(email="other@example.com")
        with self.assertRaises(Conflict):
            self.register(username="dave", email="CAROL@example.com")

    def test_activate_with_code(self) -> None:
        account = self.register()
        with self.assertRaises(Unauthorized):
            accounts.activate(self.session, account.id, "not-the-code")
        accounts.activate(self.session, account.id, account.activation_code)
        refreshed = self.session.get(Account, account.id)
        self.assertTrue(refreshed.activated)
        self.assertIsNone(refreshed.activation_code)
        with self.assertRaises(Conflict):
            accounts.activate(self.session, account.id, "123456")

    def test_resend_replaces_code(self) -> None:
        account = self.register()
        old_code = account.activation_code
        mailer = MagicMock()
        accounts.resend_activation(self.session, mailer, account.id, 8)
        new_code = self.session.get(Account, account.id).activation_code
        self.assertEqual(len(new_code), 8)
        self.assertNotEqual(old_code, new_code)
        mailer.send_activation_code.assert_called_once_with("carol@example.com", "carol", new_code)


class TestUpdateProfile(AccountsTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.account_id = create_account(self.db, "erin", PASSWORD)

    def test_rename(self) -> None:
        account = accounts.update_profile(
            self.session, self.hasher, self.account_id, UpdateAccountRequest(username="erin2")
        )
        self.assertEqual(account.username, "erin2")

    def test_rename_to_taken_username(self) -> None:
        create_account(self.db, "frank")
        with self.assertRaises(Conflict):
            accounts.update_profile(
                self.session, self.hasher, self.account_id, UpdateAccountRequest(username="frank")
            )

    def test_password_change_requires_previous_password(self) -> None:
        body = UpdateAccountRequest(
            prev_password="wrong-password", password="new-password-1", confirm_password="new-password-1"
        )
        with self.assertRaises(PasswordMismatch):
            accounts.update_profile(self.session, self.hasher, self.account_id, body)

    def test_password_change_requires_confirmation(self) -> None:
        body = UpdateAccountRequest(
            prev_password=PASSWORD, password="new-password-1", confirm_password="new-password-2"
        )
        with self.assertRaises(PasswordMismatch):
            accounts.update_profile(self.session, self.hasher, self.account_id, body)

    def test_rename_and_password_change_together(self) -> None:
        body = UpdateAccountRequest(
            username="erin2",
            prev_password=PASSWORD,
            password="new-password-1",
            confirm_password="new-password-1",
        )
        account = accounts.update_profile(self.session, self.hasher, self.account_id, body)
        self.assertEqual(account.username, "erin2")
        self.assertTrue(self.hasher.verify("new-password-1", account.password_hash))

    def test_failed_update_changes_nothing(self) -> None:
        body = UpdateAccountRequest(
            username="erin2",
            prev_password=PASSWORD,
            password="new-password-1",
            confirm_password="mismatch-123",
        )
        with self.assertRaises(PasswordMismatch):
            accounts.update_profile(self.session, self.hasher, self.account_id, body)
        account = self.session.get(Account, self.account_id)
        self.assertEqual(account.username, "erin")
        self.assertTrue(self.hasher.verify(PASSWORD, account.password_hash))

    def test_admin_account_is_not_self_managed(self) -> None:
        admin_id = create_account(self.db, "root", PASSWORD, role="admin")
        with self.assertRaises(PermissionDenied):
            accounts.update_profile(
                self.session, self.hasher, admin_id, UpdateAccountRequest(username="root2")
            )
        with self.assertRaises(PermissionDenied):
            accounts.delete_account(self.session, admin_id)
        self.assertEqual(self.session.get(Account, admin_id).username, "root")

    def test_deleted_account(self) -> None:
        accounts.delete_account(self.session, self.account_id)
        with self.assertRaises(Unauthorized):
            accounts.update_profile(
                self.session, self.hasher, self.account_id, UpdateAccountRequest(username="zed")
            )
        with self.assertRaises(Unauthorized):
            accounts.delete_account(self.session, self.account_id)


if __name__ == "__main__":
    unittest.main()
