import pytest

from decorkit.conf import settings
from decorkit.registry import decorators


@pytest.fixture(autouse=True)
def _reset_global_state():
    """Each test starts with an empty global registry and default settings."""
    decorators._frozen = False
    decorators.clear()
    settings.reset()
    yield
    decorators._frozen = False
    decorators.clear()
    settings.reset()
