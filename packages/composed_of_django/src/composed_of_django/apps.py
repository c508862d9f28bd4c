# composed_of_django/apps.py
"""
AppConfig for `composed_of_django`.

Declarations work without installing the app; adding it to INSTALLED_APPS
registers the system checks in `composed_of_django.checks`.
"""

import logging

from django.apps import AppConfig

from .tracing import span_sync

logger = logging.getLogger(__name__)


class ComposedOfConfig(AppConfig):
    """Django AppConfig for composed_of_django."""

    name = "composed_of_django"
    label = "composed_of"
    verbose_name = "Composed value objects"

    def ready(self) -> None:
        with span_sync("composed_of.django_app.ready"):
            from . import checks  # noqa: F401  (registers system checks)
            from .reflection import aggregations

            logger.info("composed_of ready: %d aggregation(s) declared", len(aggregations.all()))
