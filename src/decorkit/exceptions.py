# decorkit/exceptions.py
"""Base exceptions shared across decorkit."""


class DecorkitError(Exception):
    """Base for all decorkit exceptions."""


class ConfigurationError(DecorkitError, ValueError):
    """Raised when settings cannot be validated into a pipeline config."""


__all__ = ["DecorkitError", "ConfigurationError"]
