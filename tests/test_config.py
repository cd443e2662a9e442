"""Unit tests for settings validation."""

import unittest

from pydantic import ValidationError

from bookstore.core.config import Settings


def _settings(**values: object) -> Settings:
    return Settings(_env_file=None, **values)


class TestSettingsValidation(unittest.TestCase):
    def test_accepts_postgres_and_sqlite_urls(self) -> None:
        for url in ("postgresql://u:p@db:5432/bookstore", "sqlite:///bookstore.db"):
            with self.subTest(url=url):
                self.assertEqual(_settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_rejects_other_database_urls(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@db/bookstore")

    def test_expire_minutes_bounds(self) -> None:
        self.assertEqual(_settings(JWT_EXPIRE_MINUTES=5).JWT_EXPIRE_MINUTES, 5)
        for value in (0, 10081):
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    _settings(JWT_EXPIRE_MINUTES=value)

    def test_blank_issuer_is_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ISSUER="  ")

    def test_only_hs256_is_accepted(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="none")

    def test_api_prefix_and_log_level_are_normalized(self) -> None:
        settings = _settings(API_PREFIX="/api/", LOG_LEVEL="debug")
        self.assertEqual(settings.API_PREFIX, "/api")
        self.assertEqual(settings.LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")
