# composed_of_django/__init__.py
"""Value objects composed from flat Django model columns."""

from .aggregations import ComposedOf, composed_of
from .descriptors import ComposedOfDescriptor, clear_aggregation_cache
from .exceptions import (
    AggregationNotFoundError,
    ComposedOfError,
    ConfigurationError,
    FrozenValueObjectError,
    MissingAttributeError,
    ValueClassNotFoundError,
)
from .mixins import AggregationsMixin
from .reflection import Aggregation, get_aggregation, get_aggregations
from .value_object import ValidatedValueObject, ValueObject, is_valid

__all__ = (
    "ComposedOf",
    "composed_of",
    "ComposedOfDescriptor",
    "clear_aggregation_cache",
    "AggregationsMixin",
    "Aggregation",
    "get_aggregation",
    "get_aggregations",
    "ValueObject",
    "ValidatedValueObject",
    "is_valid",
    "ComposedOfError",
    "ConfigurationError",
    "ValueClassNotFoundError",
    "MissingAttributeError",
    "FrozenValueObjectError",
    "AggregationNotFoundError",
)
