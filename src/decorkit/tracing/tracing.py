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

_DEFAULT_TRACER_NAME = "decorkit"
_ATTR_PREFIX = "decorkit."

# Attribute keys kept at each trace level; "debug" keeps everything.
_INFO_KEYS = frozenset({
    "decorkit.owner",
    "decorkit.records",
    "decorkit.stages",
    "decorkit.preloads",
    "decorkit.preload.names",
    "decorkit.applied",
})
_MINIMAL_KEYS = frozenset({"decorkit.owner", "decorkit.records"})


def get_tracer(name: str | None = None) -> Tracer:
    """Return an OpenTelemetry tracer for this package."""
    return trace.get_tracer(name or _DEFAULT_TRACER_NAME)


def filter_attributes(attrs: Mapping[str, Any], level: str) -> dict[str, Any]:
    """Drop ``decorkit.*`` attributes not wanted at ``level``."""
    if level == "debug":
        return dict(attrs)
    keep = _MINIMAL_KEYS if level == "minimal" else _INFO_KEYS
    return {k: v for k, v in attrs.items() if k in keep or not k.startswith(_ATTR_PREFIX)}


def _clean_attributes(attrs: Mapping[str, Any] | None) -> dict[str, Any]:
    # OpenTelemetry allows only: bool, str, bytes, int, float, or sequences of those.
    ALLOWED = (bool, str, bytes, int, float)
    cleaned: dict[str, Any] = {}
    for k, v in (attrs or {}).items():
        if v is None:
            continue
        if isinstance(v, ALLOWED):
            cleaned[k] = v
        elif isinstance(v, Sequence) and not isinstance(v, (str, bytes)):
            items = [x for x in v if isinstance(x, ALLOWED)]
            if items:
                cleaned[k] = items
        # Unsupported type: skip silently
    return cleaned


def _apply_attributes(span: Span, attrs: Mapping[str, Any] | None) -> None:
    for k, v in _clean_attributes(attrs).items():
        try:
            span.set_attribute(k, v)
        except Exception:
            # Tracing must never break decoration.
            logger.debug("trace.attr.set_failed", extra={"key": k}, exc_info=True)


def set_span_attributes(span: Span | None, attrs: Mapping[str, Any], level: str) -> None:
    """Set level-filtered attributes on ``span``; a None span is ignored."""
    if span is None:
        return
    _apply_attributes(span, filter_attributes(attrs, level))


def add_span_event(span: Span | None, name: str, attrs: Mapping[str, Any], level: str) -> None:
    """Attach an event to ``span``. Events are only emitted at the ``debug`` level."""
    if span is None or level != "debug":
        return
    try:
        span.add_event(name, attributes=_clean_attributes(attrs))
    except Exception:
        logger.debug("trace.event.add_failed", extra={"event": name}, exc_info=True)


def _record_exception(span: Span, err: BaseException) -> None:
    try:
        span.record_exception(err)
        span.set_status(Status(StatusCode.ERROR, description=str(err)))
        span.set_attribute("exception.type", type(err).__name__)
        span.set_attribute("exception.msg", str(err)[:500])
    except Exception:
        logger.exception("trace.record_exception_failed")


# ---------------------------------------------------------------------------
# Context managers for spans
# ---------------------------------------------------------------------------

@contextmanager
def span_sync(
    name: str,
    *,
    attributes: Mapping[str, Any] | None = None,
    enabled: bool = True,
    level: str = "info",
) -> Iterator[Span | None]:
    """Synchronous span around a decoration phase.

    Yields None without touching OpenTelemetry when ``enabled`` is False.

    Usage:
        with span_sync("decorkit.preload", attributes={"decorkit.preloads": 2}):
            ...
    """
    if not enabled:
        yield None
        return

    tracer = get_tracer()
    with tracer.start_as_current_span(
        name,
        kind=SpanKind.INTERNAL,
        record_exception=False,
        set_status_on_exception=False,
    ) as span:
        _apply_attributes(span, filter_attributes(attributes or {}, level))
        try:
            yield span
            span.set_attribute("ok", True)
        except Exception as e:
            span.set_attribute("ok", False)
            _record_exception(span, e)
            raise


__all__ = [
    "get_tracer",
    "filter_attributes",
    "set_span_attributes",
    "add_span_event",
    "span_sync",
]
