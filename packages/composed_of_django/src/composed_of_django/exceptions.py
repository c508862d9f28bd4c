# composed_of_django/exceptions.py
"""Exceptions raised by composed_of_django."""


class ComposedOfError(Exception):
    """Base for all composed_of_django exceptions."""


# ----------------------------------------------------------------------------
# Declaration errors
# ----------------------------------------------------------------------------
class ConfigurationError(ComposedOfError): ...


class ValueClassNotFoundError(ConfigurationError, ImportError): ...


# ----------------------------------------------------------------------------
# Runtime errors
# ----------------------------------------------------------------------------
class MissingAttributeError(ComposedOfError, AttributeError): ...


class FrozenValueObjectError(ComposedOfError, AttributeError): ...


class AggregationNotFoundError(ComposedOfError, LookupError): ...


__all__ = [
    "ComposedOfError",
    "ConfigurationError",
    "ValueClassNotFoundError",
    "MissingAttributeError",
    "FrozenValueObjectError",
    "AggregationNotFoundError",
]
