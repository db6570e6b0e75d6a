"""Default configuration values for decorkit."""

DEFAULTS: dict[str, object] = {
    # Give every collection item its own shallow copy of the context.
    "ISOLATE_CONTEXT": False,
    # Freeze a type's rule book and scoped registry on its first decoration.
    "FREEZE_ON_FIRST_USE": False,
    # Tracing
    "TRACE_ENABLED": True,
    "TRACE_LEVEL": "info",
    # Log each stage's resolution branch at DEBUG.
    "LOG_RESOLUTION": False,
}
