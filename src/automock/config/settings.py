"""Configuration settings using Pydantic Settings.

Provides typed engine defaults with environment variable support.

Usage:
    from automock.config import MockerSettings

    # Load from environment variables (AUTOMOCK_*)
    settings = MockerSettings()

    # Or override with explicit values
    mocker = AutoMocker(settings=MockerSettings(trace_interceptions=True))
"""

from __future__ import annotations

try:
    from pydantic_settings import BaseSettings, SettingsConfigDict
except ImportError as e:
    raise ImportError(
        "pydantic-settings is required for the config module. "
        "Install with: pip install automock"
    ) from e


class MockerSettings(BaseSettings):  # type: ignore[misc]
    """Defaults for an AutoMocker.

    Attributes:
        default_auto_prop: Auto-property mode for stub() and pure_proxy()
            calls that do not pass auto_prop explicitly.
        isolation_auto_prop: Auto-property mode for classes pure-proxied
            by isolation.
        warn_on_wildcard_override: Warn when a key's property behavior is
            switched between null and auto-property mode.
        trace_interceptions: Log every intercepted access at DEBUG level.

    Environment Variables:
        AUTOMOCK_DEFAULT_AUTO_PROP
        AUTOMOCK_ISOLATION_AUTO_PROP
        AUTOMOCK_WARN_ON_WILDCARD_OVERRIDE
        AUTOMOCK_TRACE_INTERCEPTIONS
    """

    model_config = SettingsConfigDict(
        env_prefix="AUTOMOCK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_auto_prop: bool = False
    isolation_auto_prop: bool = True
    warn_on_wildcard_override: bool = True
    trace_interceptions: bool = False
