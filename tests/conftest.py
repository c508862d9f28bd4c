"""Shared pytest configuration: a minimal Django project for the test suite."""

import django
from django.conf import settings


def pytest_configure(config):
    """Configure Django settings before test modules import any models."""
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[
                "django.contrib.contenttypes",
                "django.contrib.auth",
                "composed_of_django",
                "tests.composed_of_django.testapp",
            ],
            DATABASES={
                "default": {
                    "ENGINE": "django.db.backends.sqlite3",
                    "NAME": ":memory:",
                }
            },
            SECRET_KEY="test-secret-key",
            USE_TZ=True,
            DEFAULT_AUTO_FIELD="django.db.models.AutoField",
        )
        django.setup()
