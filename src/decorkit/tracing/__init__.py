# decorkit/tracing/__init__.py
from .tracing import add_span_event, filter_attributes, get_tracer, set_span_attributes, span_sync

__all__ = [
    "get_tracer",
    "filter_attributes",
    "set_span_attributes",
    "add_span_event",
    "span_sync",
]
