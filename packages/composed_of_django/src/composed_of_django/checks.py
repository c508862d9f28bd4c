# composed_of_django/checks.py
"""
Django system checks for `composed_of` declarations.

For every installed model and every aggregation visible on it:
- `composed_of.E001`: a mapped column is not a concrete field of the model.
- `composed_of.E002`: the value class cannot be resolved.
- `composed_of.E003`: a named constructor/converter is missing on the value class.
- `composed_of.E004`: the property name shadows a concrete field, as the default
  same-name mapping always does on Django models.

E-checks are downgraded to warnings (`composed_of.W1xx`, same number) when
`COMPOSED_OF_CHECKS_STRICT` is False.

These checks run at startup and can be invoked with `python manage.py check`.
"""

from typing import Iterable, List, Optional

import logging

from django.apps import apps as django_apps
from django.core import checks

from .exceptions import ValueClassNotFoundError
from .reflection import Aggregation, get_aggregations
from .settings import get_bool

LOGGER = logging.getLogger(__name__)
TAG = "composed_of"


def _problem(strict: bool, number: int, msg: str, *, obj, hint: str | None = None) -> checks.CheckMessage:
    if strict:
        return checks.Error(msg, hint=hint, obj=obj, id=f"{TAG}.E{number:03d}")
    return checks.Warning(msg, hint=hint, obj=obj, id=f"{TAG}.W{100 + number:03d}")


def _check_aggregation(model, aggregation: Aggregation, strict: bool) -> List[checks.CheckMessage]:
    messages: List[checks.CheckMessage] = []
    concrete = model._meta.concrete_fields
    column_names = {f.name for f in concrete} | {f.attname for f in concrete}

    for column in aggregation.columns:
        if column not in column_names:
            messages.append(
                _problem(
                    strict, 1,
                    f"composed_of '{aggregation.name}' maps column '{column}', which is not a concrete field of {model._meta.label}.",
                    hint="Each mapping pair is (model column, value object field).",
                    obj=model,
                )
            )

    # The descriptor replaces the field's own attribute, so the column becomes unreachable.
    if aggregation.name in column_names:
        messages.append(
            _problem(
                strict, 4,
                f"composed_of '{aggregation.name}' shadows a field of the same name on {model._meta.label}.",
                hint="Rename the composed property or pass an explicit mapping to differently named columns.",
                obj=model,
            )
        )

    try:
        value_class = aggregation.value_class
    except ValueClassNotFoundError as err:
        messages.append(
            _problem(
                strict, 2,
                f"composed_of '{aggregation.name}' on {model._meta.label}: {err}",
                hint="Pass the class itself or a dotted import path as class_name.",
                obj=model,
            )
        )
        return messages

    for option in ("constructor", "converter"):
        ref = getattr(aggregation.options, option)
        if isinstance(ref, str) and not callable(getattr(value_class, ref, None)):
            messages.append(
                _problem(
                    strict, 3,
                    f"composed_of '{aggregation.name}' {option} '{ref}' is not a callable attribute of {value_class.__qualname__}.",
                    obj=model,
                )
            )
    return messages


@checks.register(checks.Tags.models)
def check_composed_of_declarations(app_configs: Optional[Iterable] = None, **kwargs) -> List[checks.CheckMessage]:
    strict = get_bool("COMPOSED_OF_CHECKS_STRICT")
    if app_configs is None:
        models = django_apps.get_models()
    else:
        models = [m for app_config in app_configs for m in app_config.get_models()]

    messages: List[checks.CheckMessage] = []
    for model in models:
        for aggregation in get_aggregations(model):
            messages.extend(_check_aggregation(model, aggregation, strict))

    if messages:
        LOGGER.debug("composed_of checks reported %d message(s)", len(messages))
    return messages
