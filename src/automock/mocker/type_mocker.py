"""Fluent per-type builder over an AutoMocker.

Usage:
    spy = mocker.type(LoginService).stub(auto_prop=True).mock(lambda s: s.login)
    spy.returns(True)

    mocker.type(Person, lambda p: p.get("first_name").returns("Ada"))

    mocker.type(LoginService).mock(
        "logout",
        lambda spy, verify: verify(lambda s: s.assert_called_once()),
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Self

from automock.core.spy import Spy
from automock.core.types import TypeKey

if TYPE_CHECKING:
    from automock.mocker.auto_mocker import AutoMocker
    from automock.mocker.verification import Matcher

type Selector[T] = str | property | Callable[[T], Any]
type SpyConfigurator = Callable[[Spy, Callable[[Matcher], None]], None]


class TypeMocker[T]:
    """Configuration calls scoped to one key.

    Builder methods return the TypeMocker; spy methods (mock, get, set)
    return the Spy, ending the chain.

    Args:
        key: Key being configured.
        mocker: Engine the configuration is applied to.
    """

    def __init__(self, key: TypeKey, mocker: AutoMocker):
        self._key = key
        self._mocker = mocker

    @property
    def key(self) -> TypeKey:
        return self._key

    def stub(self, auto_prop: bool | None = None) -> Self:
        """Make every method return None (see AutoMocker.stub)."""
        self._mocker.stub(self._key, auto_prop)
        return self

    def auto_prop(self) -> Self:
        """Give every property plain get/set behavior (see AutoMocker.auto_prop)."""
        self._mocker.auto_prop(self._key)
        return self

    def pure_proxy(self, auto_prop: bool | None = None) -> Self:
        """Resolve to stand-ins without running the constructor."""
        self._mocker.pure_proxy(self._key, auto_prop)
        return self

    def configure(self, action: Callable[[Self], Any]) -> Self:
        """Run a setup callback against this builder."""
        action(self)
        return self

    def mock(self, member: Selector[T], configure: SpyConfigurator | None = None) -> Spy:
        """Spy on a method.

        Args:
            member: Method name, method reference, or `lambda x: x.method`.
            configure: Optional callback(spy, verify) for inline setup;
                verify(matcher) defers a check until verify_all().

        Returns:
            The method's spy.
        """
        return self._configured(self._mocker.mock(self._key, member), configure)

    def get(self, member: Selector[T], configure: SpyConfigurator | None = None) -> Spy:
        """Spy on reads of a property."""
        return self._configured(self._mocker.get(self._key, member), configure)

    def set(self, member: Selector[T], configure: SpyConfigurator | None = None) -> Spy:
        """Spy on writes to a property."""
        return self._configured(self._mocker.set(self._key, member), configure)

    def _configured(self, spy: Spy, configure: SpyConfigurator | None) -> Spy:
        if configure is not None:
            configure(spy, lambda matcher: self._mocker.verify(spy, matcher))
        return spy

    def __repr__(self) -> str:
        return f"TypeMocker({self._key!r})"
