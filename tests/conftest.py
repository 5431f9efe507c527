import logging

import pytest

from model_math.core.base.error_sink import clear_error_flags
from model_math.core.config.settings import reset_config

# Disable all logging for tests to keep output clean
logging.disable(logging.CRITICAL)


@pytest.fixture(autouse=True)
def clean_runtime():
    """Start every test from the default configuration with no error flags."""
    reset_config()
    clear_error_flags()
    yield
    reset_config()
    clear_error_flags()


@pytest.fixture
def raising():
    """Switch the error sink to the raise policy for the duration of a test."""
    from model_math.core.base.error_sink import error_policy
    with error_policy("raise"):
        yield
