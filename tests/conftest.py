"""
Test configuration and fixtures

This module provides pytest configuration and shared fixtures.
"""

import os
import tempfile
import pytest
from reliefhub.adapters.seed import CuratedDataset
from reliefhub.adapters.storage import MemoryCache
from reliefhub.settings import Settings
from tests.factories import FIXED_NOW, ManualClock


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def clock():
    """Manually advanced monotonic clock"""
    return ManualClock()


@pytest.fixture
def memory_cache(clock):
    """In-process cache on the manual clock"""
    return MemoryCache(default_ttl_sec=3600, clock=clock)


@pytest.fixture
def dataset():
    return CuratedDataset()


@pytest.fixture
def temp_db_path():
    """Temporary database file path"""
    with tempfile.NamedTemporaryFile(suffix='.db', delete=False) as f:
        temp_path = f.name
    yield temp_path
    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def sample_settings():
    """Settings for tests"""
    settings = Settings()
    settings.observability.service_name = "test-service"
    settings.observability.build_version = "1.0.0"
    settings.observability.log_level = "INFO"
    return settings


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "slow: slow tests"
    )
    config.addinivalue_line(
        "markers", "integration: integration tests"
    )
