"""
Test environment. Must run before any app import: settings are read once at import time.

In-memory SQLite (sqlite://) is served from a single StaticPool connection, so
TestClient worker threads and the test body see the same database.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-do-not-use-in-production"
os.environ["APP_ENV"] = "dev"
os.environ["LOG_LEVEL"] = "WARNING"
