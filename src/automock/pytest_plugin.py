"""pytest fixtures for automock.

Enable in a conftest.py:
    pytest_plugins = ["automock.pytest_plugin"]

Then:
    def test_submit(automocker):
        automocker.isolate(LoginModel)
        model = automocker.resolve(LoginModel)
        ...
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from automock.config import MockerSettings
from automock.mocker import AutoMocker


@pytest.fixture
def automock_settings() -> MockerSettings:
    """Engine settings for the automocker fixture; override to customize."""
    return MockerSettings()


@pytest.fixture
def automocker(automock_settings: MockerSettings) -> Iterator[AutoMocker]:
    """Fresh AutoMocker per test; deferred verifications run at teardown."""
    mocker = AutoMocker(settings=automock_settings)
    yield mocker
    mocker.verify_all()
