"""
Central pytest configuration for the clinic appointment tests.

This file sets the test environment before any application import and
pulls in the shared fixtures and markers for unit and integration tests.
"""

import os

# Test database configuration (set early so import-time config reads it)
TEST_DATABASE_URL = "sqlite:///:memory:"
os.environ["DATABASE_URL"] = TEST_DATABASE_URL
os.environ["TESTING"] = "true"
os.environ["RATE_LIMIT_ENABLED"] = "0"  # Disable rate limiting in tests
os.environ.pop("SENTRY_DSN", None)
os.environ.pop("MAX_DAILY_APPOINTMENTS", None)

# Import fixtures and markers from config modules
from tests.config.markers import *  # noqa: E402,F401,F403
from tests.fixtures.database_fixtures import *  # noqa: E402,F401,F403
from tests.fixtures.service_fixtures import *  # noqa: E402,F401,F403
from tests.fixtures.integration_app_fixtures import *  # noqa: E402,F401,F403
