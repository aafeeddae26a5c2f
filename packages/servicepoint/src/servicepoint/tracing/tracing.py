import logging
from collections.abc import Mapping, Sequence
from contextlib import contextmanager
from typing import Any, Iterator

from opentelemetry import trace
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Tracer utilities
# ---------------------------------------------------------------------------

_DEFAULT_TRACER_NAME = "servicepoint"

# OpenTelemetry allows only: bool, str, bytes, int, float, or sequences of those.
_ALLOWED = (bool, str, bytes, int, float)


def get_tracer(name: str | None = None) -> Tracer:
    """Return an OpenTelemetry tracer for this package.

    Without an SDK configured this is a no-op tracer, so spans cost next to
    nothing in applications that do not export traces.
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


def _record_exception(span: Span, err: BaseException) -> None:
    span.record_exception(err)
    span.set_status(Status(StatusCode.ERROR, description=str(err)))
    span.set_attribute("exception.type", type(err).__name__)
    span.set_attribute("exception.msg", str(err)[:500])


# ---------------------------------------------------------------------------
# Context managers for spans
# ---------------------------------------------------------------------------

@contextmanager
def service_span_sync(name: str, *, attributes: Mapping[str, Any] | None = None) -> Iterator[Span]:
    """Synchronous span context.

    Usage:
        with service_span_sync("servicepoint.route", attributes={"servicepoint.name": name}):
            ...

    Exceptions are recorded on the span and re-raised unchanged.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name, kind=SpanKind.INTERNAL) as span:
        _apply_attributes(span, attributes)
        try:
            yield span
            span.set_attribute("ok", True)
        except Exception as e:
            span.set_attribute("ok", False)
            _record_exception(span, e)
            raise


__all__ = [
    "get_tracer",
    "service_span_sync",
]
