"""Decorator implementations and registration."""

from .base import BaseDecorator, DecoratorRegistration, FunctionDecorator, decorator

__all__ = ["BaseDecorator", "DecoratorRegistration", "FunctionDecorator", "decorator"]
