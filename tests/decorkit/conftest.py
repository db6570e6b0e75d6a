import pytest

from decorkit import BaseDecorator


def _tagging(tag):
    """Build a BaseDecorator subclass that appends ``tag`` to a list value."""

    class _Tag(BaseDecorator):
        decorator_name = tag
        calls: list = []

        @classmethod
        def decorate(cls, value, context, preloaded):
            cls.calls.append((value, context, preloaded))
            return [*value, tag]

    _Tag.__name__ = tag
    _Tag.calls = []
    return _Tag


@pytest.fixture()
def tagging():
    return _tagging
