# composed_of_django/reflection.py
"""
Aggregation metadata and the registry used for introspection.

Each `composed_of` declaration produces one `Aggregation`. The registry keys
them by `(model label, property name)` so project code, system checks and
admin tooling can ask "what value objects does this model compose?".

Example:
    get_aggregation(Person, "address").columns
    # ("address_street", "address_city", "address_state", "address_zip")
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, Sequence
from threading import RLock
from typing import Any, Dict, Tuple

from django.utils.module_loading import import_string

from .exceptions import AggregationNotFoundError, MissingAttributeError, ValueClassNotFoundError
from .options import AggregationOptions
from .value_object import ValueAdapter, adapter_for

logger = logging.getLogger(__name__)

__all__ = [
    "Aggregation",
    "AggregationRegistry",
    "aggregations",
    "get_aggregation",
    "get_aggregations",
]


def resolve_value_class(ref: type | str, model: type) -> type:
    """Resolve a class, dotted path, or bare name (looked up in `model`'s module)."""
    if isinstance(ref, type):
        return ref
    if "." in ref:
        try:
            cls = import_string(ref)
        except ImportError as err:
            raise ValueClassNotFoundError(f"Cannot import value class {ref!r}") from err
    else:
        module = sys.modules.get(model.__module__)
        cls = getattr(module, ref, None)
        if cls is None:
            raise ValueClassNotFoundError(
                f"Value class {ref!r} not found in {model.__module__}; "
                f"pass the class or a dotted path as class_name"
            )
    if not isinstance(cls, type):
        raise ValueClassNotFoundError(f"{ref!r} resolved to {cls!r}, which is not a class")
    return cls


class Aggregation:
    """Resolved declaration of one composed property on one model."""

    def __init__(self, model: type, name: str, options: AggregationOptions) -> None:
        self.model = model
        self.name = name
        self.options = options
        self.mapping: Tuple[Tuple[str, str], ...] = tuple(options.mapping or ())
        self._value_class: type | None = None
        self._adapter: ValueAdapter | None = None

    def __repr__(self) -> str:
        return f"<Aggregation {self.label} -> {self.options.class_name!r}>"

    @property
    def label(self) -> str:
        return f"{self.model._meta.label}.{self.name}"

    @property
    def columns(self) -> Tuple[str, ...]:
        return tuple(column for column, _ in self.mapping)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(field for _, field in self.mapping)

    @property
    def allow_nil(self) -> bool:
        return bool(self.options.allow_nil)

    @property
    def autosave(self) -> bool:
        return bool(self.options.autosave)

    @property
    def value_class(self) -> type:
        # Resolved on first use so value classes may be defined after the model.
        if self._value_class is None:
            self._value_class = resolve_value_class(self.options.class_name, self.model)
        return self._value_class

    @property
    def adapter(self) -> ValueAdapter:
        if self._adapter is None:
            self._adapter = adapter_for(self.value_class)
        return self._adapter

    def adapter_for_value(self, value: Any) -> ValueAdapter:
        if isinstance(value, self.value_class):
            return self.adapter
        return adapter_for(type(value))

    def build(self, values: Sequence[Any]) -> Any:
        """Invoke the configured constructor with column values in mapping order."""
        constructor = self.options.constructor
        if constructor is None:
            return self.value_class(*values)
        if callable(constructor):
            return constructor(*values)
        return getattr(self.value_class, constructor)(*values)

    def convert(self, value: Any) -> Any:
        converter = self.options.converter
        if callable(converter):
            return converter(value)
        return getattr(self.value_class, converter)(value)

    def from_mapping(self, data: Mapping[str, Any]) -> Any:
        """Build a value from a field-name keyed mapping, in declared mapping order."""
        unknown = [key for key in data if key not in self.fields]
        if unknown:
            raise MissingAttributeError(
                f"{self.value_class.__name__} has no mapped field(s) {', '.join(map(str, unknown))} "
                f"for {self.label}"
            )
        return self.value_class(*(data.get(field) for field in self.fields))


class AggregationRegistry:
    """Thread-safe store of declared aggregations keyed by (model label, name)."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._store: Dict[Tuple[str, str], Aggregation] = {}

    @staticmethod
    def _key(model: type, name: str) -> Tuple[str, str]:
        return (model._meta.label_lower, name)

    def register(self, aggregation: Aggregation) -> None:
        """Register `aggregation`; redeclaring a property replaces the previous entry."""
        key = self._key(aggregation.model, aggregation.name)
        with self._lock:
            previous = self._store.get(key)
            if previous is not None:
                logger.warning("Redeclaring composed_of %s (was %r)", aggregation.label, previous)
            self._store[key] = aggregation

    def try_get(self, model: type, name: str) -> Aggregation | None:
        with self._lock:
            for klass in model.__mro__:
                if getattr(klass, "_meta", None) is None:
                    continue
                found = self._store.get(self._key(klass, name))
                if found is not None:
                    return found
        return None

    def get(self, model: type, name: str) -> Aggregation:
        found = self.try_get(model, name)
        if found is None:
            raise AggregationNotFoundError(f"{model.__name__} has no composed_of {name!r}")
        return found

    def for_model(self, model: type) -> Tuple[Aggregation, ...]:
        """Aggregations visible on `model`, inherited ones included; subclasses win."""
        found: Dict[str, Aggregation] = {}
        with self._lock:
            for klass in reversed(model.__mro__):
                if getattr(klass, "_meta", None) is None:
                    continue
                label = klass._meta.label_lower
                for (model_label, name), aggregation in self._store.items():
                    if model_label == label:
                        found[name] = aggregation
        return tuple(found.values())

    def all(self) -> Tuple[Aggregation, ...]:
        with self._lock:
            return tuple(self._store.values())


aggregations = AggregationRegistry()


def get_aggregation(model: type, name: str) -> Aggregation:
    return aggregations.get(model, name)


def get_aggregations(model: type) -> Tuple[Aggregation, ...]:
    return aggregations.for_model(model)
