"""Spy: a call recorder with fluent return configuration.

Usage:
    spy = mocker.mock(LoginService, "login").returns(True)
    ...
    spy.assert_called_once_with("user", "secret")

    mocker.get(Person, "age").calls(lambda: 42)
    mocker.set(Person, "name").calls_through()
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Self
from unittest.mock import Mock


class Spy(Mock):
    """unittest.mock.Mock that returns None until configured.

    Return behavior is one of:
        returns(value)   fixed value (also settable via return_value)
        calls(fn)        computed from the call arguments (side_effect)
        calls_through()  record the call, then run the real member
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("return_value", None)
        super().__init__(*args, **kwargs)
        self._passthrough = False

    @property
    def passes_through(self) -> bool:
        """Whether intercepted calls also run the real member."""
        return self._passthrough

    def returns(self, value: Any) -> Self:
        """Return value from every call."""
        self._passthrough = False
        self.side_effect = None
        self.return_value = value
        return self

    def calls(self, fn: Callable[..., Any]) -> Self:
        """Compute each call's result as fn(*args, **kwargs)."""
        self._passthrough = False
        self.side_effect = fn
        return self

    def calls_through(self) -> Self:
        """Record each call, then let the real member handle it."""
        self.side_effect = None
        self._passthrough = True
        return self
