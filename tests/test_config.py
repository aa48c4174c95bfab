"""Unit tests for app.core.config.Settings validation."""

import unittest

from pydantic import ValidationError

from app.core.config import Settings


def _settings(**overrides: object) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettingsDefaults(unittest.TestCase):
    def test_token_lifetimes(self) -> None:
        s = _settings(ACCESS_TOKEN_EXPIRE_MINUTES=15, REFRESH_TOKEN_EXPIRE_MINUTES=10080)
        self.assertEqual(s.JWT_ALGORITHM, "HS256")
        self.assertLess(s.ACCESS_TOKEN_EXPIRE_MINUTES, s.REFRESH_TOKEN_EXPIRE_MINUTES)


class TestSettingsValidation(unittest.TestCase):
    def test_database_url_schemes(self) -> None:
        self.assertEqual(_settings(DATABASE_URL=" sqlite:///./x.db ").DATABASE_URL, "sqlite:///./x.db")
        _settings(DATABASE_URL="postgresql://u:p@localhost:5432/db")
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="mysql://u:p@localhost/db")
        with self.assertRaises(ValidationError):
            _settings(DATABASE_URL="  ")

    def test_blank_jwt_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_SECRET="   ")

    def test_asymmetric_algorithm_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(JWT_ALGORITHM="RS256")

    def test_access_ttl_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(ACCESS_TOKEN_EXPIRE_MINUTES=0)
        with self.assertRaises(ValidationError):
            _settings(ACCESS_TOKEN_EXPIRE_MINUTES=1441)

    def test_refresh_shorter_than_access_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            _settings(ACCESS_TOKEN_EXPIRE_MINUTES=60, REFRESH_TOKEN_EXPIRE_MINUTES=30)

    def test_log_level_normalized(self) -> None:
        self.assertEqual(_settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_api_prefix(self) -> None:
        self.assertEqual(_settings(API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            _settings(API_PREFIX="api")


if __name__ == "__main__":
    unittest.main()
