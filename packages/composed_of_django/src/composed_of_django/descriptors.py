# composed_of_django/descriptors.py
"""
Accessor runtime for composed properties.

`ComposedOfDescriptor` is installed on the model class under the property name
(see `composed_of_django.aggregations`). Reads build the value object lazily
from the instance's column attributes and cache it on the instance; writes
decompose a value object back into columns, seal it (validate, then freeze),
cache it, and optionally save the instance.

Each property caches under its own key in the instance `__dict__`
(`_composed_of_cache_<name>`). Django copies `__dict__` shallowly for
`copy.copy()` and pickling, so a clone starts with the same cached objects
but rebinding one on the clone never reaches the original. The cache is not
guarded: do not share one model instance across threads without external
locking.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .exceptions import MissingAttributeError
from .reflection import Aggregation
from .tracing import span_sync

logger = logging.getLogger(__name__)

__all__ = [
    "CACHE_PREFIX",
    "ComposedOfDescriptor",
    "cache_key",
    "get_cached_aggregation",
    "clear_aggregation_cache",
]

CACHE_PREFIX = "_composed_of_cache_"


def cache_key(name: str) -> str:
    return f"{CACHE_PREFIX}{name}"


def get_cached_aggregation(instance: Any, name: str) -> Any:
    return instance.__dict__.get(cache_key(name))


def clear_aggregation_cache(instance: Any, name: str | None = None) -> None:
    """Drop cached value objects so the next read rebuilds them from columns."""
    if name is not None:
        instance.__dict__.pop(cache_key(name), None)
        return
    for key in [k for k in instance.__dict__ if k.startswith(CACHE_PREFIX)]:
        del instance.__dict__[key]


class ComposedOfDescriptor:
    """Reader/writer pair for one `Aggregation`."""

    def __init__(self, aggregation: Aggregation) -> None:
        self.aggregation = aggregation

    def __get__(self, instance: Any, cls: type | None = None) -> Any:
        if instance is None:
            return self
        return self.read(instance)

    def __set__(self, instance: Any, value: Any) -> None:
        self.write(instance, value)

    # ------------------------------------------------------------------ read
    def read(self, instance: Any) -> Any:
        agg = self.aggregation
        cached = get_cached_aggregation(instance, agg.name)
        if cached is not None:
            return cached

        values = [getattr(instance, column) for column in agg.columns]
        if agg.allow_nil and all(v is None for v in values):
            return None

        value = agg.build(values)
        instance.__dict__[cache_key(agg.name)] = value
        logger.debug("Built %s for %s from columns %s", type(value).__name__, agg.label, agg.columns)
        return value

    # ----------------------------------------------------------------- write
    def write(self, instance: Any, value: Any) -> None:
        agg = self.aggregation
        klass = agg.value_class

        if isinstance(value, Mapping) and not isinstance(value, klass):
            value = agg.from_mapping(value)

        if not (isinstance(value, klass) or agg.options.converter is None or value is None):
            value = agg.convert(value)

        if value is None and agg.allow_nil:
            for column in agg.columns:
                setattr(instance, column, None)
            clear_aggregation_cache(instance, agg.name)
            logger.debug("Cleared %s columns %s", agg.label, agg.columns)
        else:
            for column, field in agg.mapping:
                try:
                    field_value = getattr(value, field)
                except AttributeError as err:
                    raise MissingAttributeError(
                        f"{type(value).__name__} has no attribute {field!r} required by {agg.label}"
                    ) from err
                setattr(instance, column, field_value)
            instance.__dict__[cache_key(agg.name)] = agg.adapter_for_value(value).seal(value)
            logger.debug("Assigned %s to %s", type(value).__name__, agg.label)

        if agg.autosave and (value is None or agg.adapter_for_value(value).is_valid(value)):
            self._autosave(instance)

    def _autosave(self, instance: Any) -> None:
        agg = self.aggregation
        attrs = {
            "composed_of.model": agg.model._meta.label,
            "composed_of.name": agg.name,
            "composed_of.pk": instance.pk,
        }
        with span_sync("composed_of.autosave", attributes=attrs):
            logger.info("Autosaving %s pk=%s after %s assignment", agg.model._meta.label, instance.pk, agg.name)
            instance.save()
