"""Configuration module using Pydantic Settings.

Provides typed defaults for the mocking engine with environment variable support.

Usage:
    from automock.config import MockerSettings

    settings = MockerSettings(default_auto_prop=True)
"""

from automock.config.settings import MockerSettings

__all__ = [
    "MockerSettings",
]
