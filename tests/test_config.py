"""Unit tests for app.core.config.Settings validation."""

import unittest
from unittest.mock import patch

from pydantic import ValidationError

from app.core.config import Settings
from support import ACCESS_SECRET, make_settings


class TestSettings(unittest.TestCase):
    def test_test_settings_are_valid(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.API_V1_PREFIX, "/api/v1")
        self.assertEqual(settings.refresh_token_max_age, 14 * 24 * 60 * 60)

    def test_jwt_secrets_must_differ(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_REFRESH_TOKEN_SECRET=ACCESS_SECRET)

    def test_empty_jwt_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_ACCESS_TOKEN_SECRET="  ")

    def test_database_url_schemes(self) -> None:
        self.assertTrue(make_settings("/tmp/x.db").DATABASE_URL.startswith("sqlite:///"))
        settings = make_settings(DATABASE_URL="postgresql+psycopg2://u:p@db:5432/board")
        self.assertEqual(settings.DATABASE_URL, "postgresql+psycopg2://u:p@db:5432/board")
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://u:p@db/board")

    def test_api_prefix_trailing_slash_stripped(self) -> None:
        self.assertEqual(make_settings(API_V1_PREFIX="/api/v2/").API_V1_PREFIX, "/api/v2")
        with self.assertRaises(ValidationError):
            make_settings(API_V1_PREFIX="api")

    def test_bounds(self) -> None:
        for field, value in [
            ("BCRYPT_ROUNDS", 3),
            ("BCRYPT_ROUNDS", 17),
            ("ACTIVATION_CODE_LENGTH", 3),
            ("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", 0),
            ("JWT_ACCESS_TOKEN_EXPIRE_MINUTES", 1441),
            ("JWT_REFRESH_TOKEN_EXPIRE_DAYS", 91),
            ("MAIL_TIMEOUT_SEC", 0),
            ("PAGE_SIZE", 0),
        ]:
            with self.subTest(field=field, value=value):
                with self.assertRaises(ValidationError):
                    make_settings(**{field: value})

    def test_reads_environment(self) -> None:
        env = {
            "DATABASE_URL": "sqlite://",
            "JWT_ACCESS_TOKEN_SECRET": "env-access",
            "JWT_REFRESH_TOKEN_SECRET": "env-refresh",
            "JWT_ACCESS_TOKEN_EXPIRE_MINUTES": "30",
        }
        with patch.dict("os.environ", env):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES, 30)
        self.assertEqual(settings.JWT_ACCESS_TOKEN_SECRET.get_secret_value(), "env-access")


if __name__ == "__main__":
    unittest.main()
