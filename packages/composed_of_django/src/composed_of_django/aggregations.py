# composed_of_django/aggregations.py
"""
Declaration surface for composed properties.

Two equivalent ways to declare that `address` is composed of four columns:

    class Person(models.Model):
        address_street = models.CharField(max_length=255, null=True)
        ...
        address = ComposedOf(
            class_name=Address,
            mapping=[("address_street", "street"), ("address_city", "city"),
                     ("address_state", "state"), ("address_zip", "zip")],
            allow_nil=True,
        )

    composed_of(Person, "address", class_name=Address, mapping=[...], allow_nil=True)

Both resolve the options once, install a `ComposedOfDescriptor` under the
property name and register the `Aggregation` for introspection. Options are
documented in `composed_of_django.options`.
"""

from __future__ import annotations

import logging
from typing import Any

from .descriptors import ComposedOfDescriptor
from .options import resolve_options
from .reflection import Aggregation, aggregations

logger = logging.getLogger(__name__)

__all__ = ["ComposedOf", "composed_of"]


def composed_of(model: type, name: str, /, **options: Any) -> Aggregation:
    """
    Declare `name` on `model` as a value object composed of mapped columns.

    Raises:
        ConfigurationError: invalid options; nothing is installed.
    """
    resolved = resolve_options(name, options)
    aggregation = Aggregation(model, name, resolved)
    setattr(model, name, ComposedOfDescriptor(aggregation))
    aggregations.register(aggregation)
    logger.info("Declared composed_of %s over columns %s", aggregation.label, aggregation.columns)
    return aggregation


class ComposedOf:
    """Class-body declaration; Django calls `contribute_to_class` while building the model."""

    def __init__(self, **options: Any) -> None:
        self.options = options

    def contribute_to_class(self, cls: type, name: str, **kwargs: Any) -> None:
        composed_of(cls, name, **self.options)
