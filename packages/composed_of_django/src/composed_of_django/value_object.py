# composed_of_django/value_object.py
"""
composed_of_django.value_object
===============================

Value object bases and the validation adapters used by the write path.

Value classes opt in to behavior by inheritance:

- `ValueObject`: freezable, field-equality compared, always valid.
- `ValidatedValueObject`: adds Django-style validation (`required_fields`,
  `field_validators`, `clean()`), an `errors` mapping and a validity flag that
  is cached once the object is frozen.

Any other class (a `Decimal`, a frozen dataclass, a third-party type) can still
be composed; it simply goes through the `UnvalidatedAdapter` and always reports
itself valid.

Write protocol
--------------
The accessor runtime never relies on `freeze()` having side effects. It calls
`adapter.seal(value)`, which runs the two explicit steps in order:

    adapter.validate(value)   # may record errors on the value
    adapter.freeze(value)     # marks it immutable

After that `is_valid()` on a `ValidatedValueObject` returns the flag computed
at sealing time without revalidating.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from operator import itemgetter
from typing import Any, ClassVar, Protocol, runtime_checkable

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.core.validators import EMPTY_VALUES

from .exceptions import FrozenValueObjectError
from .tracing import span_sync

logger = logging.getLogger(__name__)

__all__ = [
    "ValueObject",
    "ValidatedValueObject",
    "SupportsValidation",
    "ValueAdapter",
    "UnvalidatedAdapter",
    "ValidatingAdapter",
    "adapter_for",
    "is_valid",
]

BLANK_MESSAGE = "This field cannot be blank."


class ValueObject:
    """Base for composed values: immutable once frozen, compared by public fields."""

    _frozen: bool = False

    def __setattr__(self, name: str, value: Any) -> None:
        if self._frozen:
            raise FrozenValueObjectError(f"can't set {name!r} on frozen {type(self).__name__}")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if self._frozen:
            raise FrozenValueObjectError(f"can't delete {name!r} on frozen {type(self).__name__}")
        super().__delattr__(name)

    def freeze(self):
        object.__setattr__(self, "_frozen", True)
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def is_valid(self, context: Any = None) -> bool:
        return True

    def value_fields(self) -> dict[str, Any]:
        """Public instance attributes, in assignment order."""
        return {k: v for k, v in vars(self).items() if not k.startswith("_")}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.value_fields() == other.value_fields()

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(self.value_fields().items(), key=itemgetter(0)))))

    def __repr__(self) -> str:
        fields = ", ".join(f"{k}={v!r}" for k, v in self.value_fields().items())
        return f"{type(self).__name__}({fields})"


class ValidatedValueObject(ValueObject):
    """
    Value object with a validation capability.

    Class attributes:
        required_fields:  names whose value must not be empty (`EMPTY_VALUES`).
        field_validators: name -> Django validators (callables raising
                          `ValidationError`). Skipped for empty values.

    Override `clean()` for cross-field rules; it may read `validation_context`.
    """

    required_fields: ClassVar[tuple[str, ...]] = ()
    field_validators: ClassVar[Mapping[str, Sequence[Callable[[Any], Any]]]] = {}

    @property
    def errors(self) -> dict[str, list[str]]:
        return {name: list(messages) for name, messages in self.__dict__.get("_errors", {}).items()}

    @property
    def validation_context(self) -> Any:
        return self.__dict__.get("_validation_context")

    def clean(self) -> None:
        """Hook for cross-field validation."""

    def run_validations(self) -> bool:
        errors: dict[str, list[str]] = {}

        for name in self.required_fields:
            if getattr(self, name, None) in EMPTY_VALUES:
                errors.setdefault(name, []).append(BLANK_MESSAGE)

        for name, validators in self.field_validators.items():
            value = getattr(self, name, None)
            if value in EMPTY_VALUES:
                continue
            for validator in validators:
                try:
                    validator(value)
                except ValidationError as e:
                    errors.setdefault(name, []).extend(e.messages)

        try:
            self.clean()
        except ValidationError as e:
            if hasattr(e, "error_dict"):
                for name, messages in e.message_dict.items():
                    errors.setdefault(name, []).extend(messages)
            else:
                errors.setdefault(NON_FIELD_ERRORS, []).extend(e.messages)

        object.__setattr__(self, "_errors", errors)
        return not errors

    def is_valid(self, context: Any = None) -> bool:
        if self._frozen and "_valid" in self.__dict__:
            return self.__dict__["_valid"]

        previous = self.validation_context
        object.__setattr__(self, "_validation_context", context)
        try:
            valid = self.run_validations()
        finally:
            object.__setattr__(self, "_validation_context", previous)
        object.__setattr__(self, "_valid", valid)
        return valid


@runtime_checkable
class SupportsValidation(Protocol):
    def run_validations(self) -> bool: ...

    def is_valid(self, context: Any = None) -> bool: ...


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------

class ValueAdapter:
    """Write-time protocol for a family of value classes."""

    validates: ClassVar[bool] = False

    def validate(self, value: Any, context: Any = None) -> bool:
        raise NotImplementedError

    def is_valid(self, value: Any) -> bool:
        raise NotImplementedError

    def freeze(self, value: Any) -> Any:
        freeze = getattr(value, "freeze", None)
        if callable(freeze):
            freeze()
        return value

    def seal(self, value: Any, context: Any = None) -> Any:
        """Validate, then freeze. Returns `value`."""
        self.validate(value, context)
        return self.freeze(value)


class UnvalidatedAdapter(ValueAdapter):
    def validate(self, value: Any, context: Any = None) -> bool:
        return True

    def is_valid(self, value: Any) -> bool:
        return True


class ValidatingAdapter(ValueAdapter):
    validates = True

    def validate(self, value: Any, context: Any = None) -> bool:
        attrs = {"composed_of.value_class": type(value).__qualname__}
        with span_sync("composed_of.validate", attributes=attrs) as span:
            valid = value.is_valid(context)
            span.set_attribute("composed_of.valid", valid)
        if not valid:
            logger.debug("%s failed validation: %s", type(value).__qualname__, getattr(value, "errors", None))
        return valid

    def is_valid(self, value: Any) -> bool:
        return value.is_valid()


_UNVALIDATED = UnvalidatedAdapter()
_VALIDATING = ValidatingAdapter()


def adapter_for(value_cls: type) -> ValueAdapter:
    """Pick the adapter for `value_cls` from its declared capabilities."""
    if isinstance(value_cls, type) and issubclass(value_cls, SupportsValidation):
        return _VALIDATING
    return _UNVALIDATED


def is_valid(value: Any) -> bool:
    """Validity of any composed value; values without a validation capability are valid."""
    return adapter_for(type(value)).is_valid(value)
