import pytest

from ims.infrastructure.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI invocations configure the ``ims`` logger; undo that between tests."""
    yield
    reset_logging()
