# composed_of_django/options.py
"""
Strict option schema for `composed_of` declarations.

Recognized keys:
    class_name:  value class, dotted import path, or bare class name looked up
                 in the model's module. Defaults to the camelized property name.
    mapping:     (column, field) pair or sequence of pairs. The order is the
                 positional argument order passed to the constructor.
                 Defaults to [(name, name)].
    allow_nil:   skip construction when every mapped column is None; assigning
                 None clears every mapped column.
    constructor: name of a factory on the value class, or a callable.
                 Defaults to the value class itself.
    converter:   name of a class-level operation on the value class, or a
                 callable, applied to assigned values that are not instances of
                 the value class.
    autosave:    save the owning model after a write whose value is None or valid.

Design notes:
- Unknown keys are rejected (extra="forbid") so typos fail at class definition.
- Defaults for allow_nil/autosave come from project settings.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ValidationError, field_validator
from pydantic.config import ConfigDict

from .exceptions import ConfigurationError
from .settings import get_bool

__all__ = [
    "VALID_KEYS",
    "AggregationOptions",
    "camelize",
    "resolve_options",
]

VALID_KEYS: tuple[str, ...] = (
    "class_name",
    "mapping",
    "allow_nil",
    "constructor",
    "converter",
    "autosave",
)


def camelize(name: str) -> str:
    """
    Return the conventional class name for a snake_case property name.

    Examples:
        camelize("address")      -> "Address"
        camelize("gps_location") -> "GpsLocation"
    """
    return "".join(part[:1].upper() + part[1:] for part in name.split("_") if part)


class AggregationOptions(BaseModel):
    """Declaration options (STRICT). `None` means "not given"; see `resolve_options`."""

    class_name: Optional[Union[type, str]] = None
    mapping: Optional[tuple[tuple[str, str], ...]] = None
    allow_nil: Optional[bool] = None
    constructor: Optional[Union[str, Callable[..., Any]]] = None
    converter: Optional[Union[str, Callable[..., Any]]] = None
    autosave: Optional[bool] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("mapping", mode="before")
    @classmethod
    def _wrap_single_pair(cls, value: Any) -> Any:
        if value is None:
            return value
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            raise ValueError("mapping must be a (column, field) pair or a sequence of pairs")
        items = list(value)
        if not items:
            raise ValueError("mapping must not be empty")
        # ("address_street", "street") -> [("address_street", "street")]
        if isinstance(items[0], str):
            items = [items]
        return items

    @field_validator("mapping")
    @classmethod
    def _check_identifiers(cls, value: Optional[tuple[tuple[str, str], ...]]) -> Any:
        for column, field in value or ():
            if not column.isidentifier() or not field.isidentifier():
                raise ValueError(f"mapping pair {(column, field)!r} must contain identifiers")
        return value

    @field_validator("constructor", "converter")
    @classmethod
    def _check_operation_name(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.isidentifier():
            raise ValueError(f"{value!r} is not a valid operation name")
        return value


def resolve_options(name: str, options: Mapping[str, Any]) -> AggregationOptions:
    """
    Validate `options` for property `name` and fill in every default.

    Raises:
        ConfigurationError: unknown keys, malformed values, or a bad property name.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise ConfigurationError(f"composed_of property name must be an identifier, got {name!r}")

    unknown = sorted(str(k) for k in options if k not in VALID_KEYS)
    if unknown:
        raise ConfigurationError(
            f"Unknown key(s) for composed_of {name!r}: {', '.join(unknown)}. "
            f"Valid keys are: {', '.join(VALID_KEYS)}"
        )

    try:
        parsed = AggregationOptions(**options)
    except ValidationError as err:
        raise ConfigurationError(f"Invalid options for composed_of {name!r}: {err}") from err

    return parsed.model_copy(
        update={
            "class_name": parsed.class_name or camelize(name),
            "mapping": parsed.mapping or ((name, name),),
            "allow_nil": (
                parsed.allow_nil
                if parsed.allow_nil is not None
                else get_bool("COMPOSED_OF_ALLOW_NIL_DEFAULT")
            ),
            "autosave": (
                parsed.autosave
                if parsed.autosave is not None
                else get_bool("COMPOSED_OF_AUTOSAVE_DEFAULT")
            ),
        }
    )
