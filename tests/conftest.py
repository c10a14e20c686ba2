import pytest

from mazeanchor.src.validation import reset_validator


@pytest.fixture(autouse=True)
def _fresh_validator():
    reset_validator()
    yield
    reset_validator()
