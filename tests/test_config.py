"""Unit tests for Settings validation."""

import unittest

from pydantic import ValidationError

from ebookshare.core.config import DEFAULT_JWT_SECRET, Settings


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = _settings()
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.BCRYPT_ROUNDS, 8)
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(settings.MAX_REQUEST_BYTES, 5 * 1024 * 1024)

    def test_default_secret_is_long_enough_for_hs256(self) -> None:
        self.assertGreaterEqual(len(DEFAULT_JWT_SECRET.encode("utf-8")), 32)

    def test_accepts_postgres_and_sqlite_urls(self) -> None:
        self.assertEqual(_settings(DATABASE_URL=" sqlite:///./x.db ").DATABASE_URL, "sqlite:///./x.db")
        _settings(DATABASE_URL="postgresql+psycopg2://u:p@h/db")

    def test_rejects_other_database_urls(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mongodb://localhost:27017/ebooks")

    def test_rejects_blank_jwt_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_prod_requires_non_default_secret(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(APP_ENV="prod")
        self.assertEqual(_settings(APP_ENV="prod", JWT_SECRET="s3cret").APP_ENV, "prod")

    def test_expire_minutes_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(JWT_EXPIRE_MINUTES=10081)

    def test_bcrypt_rounds_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(BCRYPT_ROUNDS=3)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_settings_are_immutable(self) -> None:
        settings = _settings()
        with self.assertRaises(ValidationError):
            settings.PORT = 8080


if __name__ == "__main__":
    unittest.main()
