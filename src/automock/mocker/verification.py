"""Deferred verification: register checks while arranging, run them at the end.

Usage:
    mocker.verify(login_spy, lambda s: s.assert_called_once_with("u", "p"))
    mocker.verify(logout_spy, lambda s: s.call_count == 0)
    ...act...
    mocker.verify_all()
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from automock.core.spy import Spy

type Matcher = Callable[[Spy], Any]
"""Check on a spy: fails by raising AssertionError or returning False."""


class VerificationError(AssertionError):
    """Raised by verify_all() with every failed deferred check."""

    def __init__(self, failures: list[AssertionError]):
        self.failures = failures
        details = "\n".join(f"  - {failure}" for failure in failures)
        super().__init__(f"{len(failures)} deferred verification(s) failed:\n{details}")


class VerificationQueue:
    """Ordered list of deferred spy checks."""

    def __init__(self) -> None:
        self._checks: list[tuple[Spy, Matcher]] = []

    def add(self, spy: Spy, matcher: Matcher) -> None:
        """Queue matcher to run against spy later."""
        self._checks.append((spy, matcher))

    def run(self) -> None:
        """Run every queued check in registration order.

        Raises:
            VerificationError: If any check raised AssertionError or returned False.
        """
        failures: list[AssertionError] = []
        for spy, matcher in self._checks:
            try:
                outcome = matcher(spy)
            except AssertionError as e:
                failures.append(e)
                continue
            if outcome is False:
                failures.append(AssertionError(f"Check on {spy!r} returned False"))
        if failures:
            raise VerificationError(failures)

    def __len__(self) -> int:
        return len(self._checks)
