"""Shared test fixtures."""

import sys

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from automock import AutoMocker, Injector, MockerSettings

from sample_types import construction_log

pytest_plugins = ["automock.pytest_plugin"]


@pytest.fixture(autouse=True)
def _clear_construction_log():
    construction_log.clear()
    yield
    construction_log.clear()


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return MockerSettings(_env_file=None)


@pytest.fixture
def mkr(settings):
    """Fresh AutoMocker instance."""
    return AutoMocker(settings=settings)


@pytest.fixture
def injector():
    """Fresh Injector instance."""
    return Injector()


@pytest.fixture
def automock_settings(settings):
    """Keep the plugin's automocker fixture independent of the environment."""
    return settings
