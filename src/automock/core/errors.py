"""Engine errors raised at configuration time."""


class AutoMockError(Exception):
    """Base class for errors raised by the mocking engine."""

    pass


class ConfigurationError(AutoMockError):
    """Raised when a key or member cannot be configured as requested.

    Example: pure-proxying a string key, which has no class to borrow.
    """

    pass


class SelectorParseError(AutoMockError):
    """Raised when a member selector is not a single attribute access on its parameter."""

    pass
