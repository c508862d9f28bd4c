# composed_of_django/tracing.py
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

_DEFAULT_TRACER_NAME = "composed_of_django"

# OpenTelemetry allows only: bool, str, bytes, int, float, or sequences of those.
_ALLOWED = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    """Return an OpenTelemetry tracer for this package.

    The global SDK (exporters, processors) is configured by the project; without
    one the API hands back a no-op tracer.
    """
    return trace.get_tracer(name or _DEFAULT_TRACER_NAME)


def _apply_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    if not attrs:
        return
    for k, v in attrs.items():
        if v is None:
            continue
        if isinstance(v, _ALLOWED):
            span.set_attribute(k, v)
        elif isinstance(v, Sequence) and not isinstance(v, (str, bytes)):
            cleaned = [x for x in v if isinstance(x, _ALLOWED)]
            if cleaned:
                span.set_attribute(k, cleaned)
        else:
            logger.debug("trace.attr.skipped key=%s type=%s", k, type(v).__name__)


def _record_exception(span: Span, err: BaseException) -> None:
    span.record_exception(err)
    span.set_status(Status(StatusCode.ERROR, description=str(err)))
    span.set_attribute("exception.type", type(err).__name__)
    span.set_attribute("exception.msg", str(err)[:500])


@contextmanager
def span_sync(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Span around one step of the composed_of runtime.

    Spans opened by this package:
        composed_of.validate          ValidatingAdapter.validate; `composed_of.value_class`
        composed_of.autosave          the save() after a write; `composed_of.model`,
                                      `composed_of.name`, `composed_of.pk`
        composed_of.django_app.ready  ComposedOfConfig.ready()

    `composed_of.ok` is set on exit. A raised exception is recorded on the span
    and re-raised unchanged, so a failing save() still reaches the caller.
    """
    with get_tracer().start_as_current_span(name, kind=SpanKind.INTERNAL) as span:
        _apply_attributes(span, attributes)
        try:
            yield span
        except Exception as err:
            span.set_attribute("composed_of.ok", False)
            _record_exception(span, err)
            raise
        span.set_attribute("composed_of.ok", True)


__all__ = [
    "get_tracer",
    "span_sync",
]
