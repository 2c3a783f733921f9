"""
Shared fixtures.

Every test runs with the evaluation date pinned to 2024-01-15 and the
global settings restored afterwards.
"""

from datetime import date
import pytest

from fralib.settings import saved_settings


@pytest.fixture(autouse=True)
def evaluation_date():
    """Pin the evaluation date for the duration of a test."""
    with saved_settings() as settings:
        settings.evaluation_date = date(2024, 1, 15)
        yield settings
