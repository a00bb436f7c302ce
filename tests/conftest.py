"""
Shared fixtures.
"""

import pytest

from frpulse.core.config import get_settings


@pytest.fixture
def frpulse_home(tmp_path, monkeypatch):
    """Point FRPULSE_HOME at a temporary directory with fresh settings."""
    monkeypatch.setenv("FRPULSE_HOME", str(tmp_path))
    get_settings.cache_clear()
    yield tmp_path
    get_settings.cache_clear()
