"""AutoMocker: the engine facade handed to test authors.

One AutoMocker per test. It owns an Injector (or any Container) plus all
mocking state: spies, property bags, pure proxies, the isolation allow list
and deferred verifications. Nothing is shared between AutoMocker instances.

Usage:
    mocker = AutoMocker()

    # Stub a collaborator, spy on one method
    mocker.stub(LoginService)
    login = mocker.mock(LoginService, "login").returns(True)

    model = mocker.resolve(LoginModel)
    assert model.submit() is True
    login.assert_called_once_with("user", "secret")

    # Only LoginModel is real; everything it depends on is a pure proxy
    mocker.isolate(LoginModel)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar, overload

from automock.config import MockerSettings
from automock.core.interception import AutoPropertyStore, MemberInterceptor
from automock.core.selector import member_name
from automock.core.spy import Spy, SpyRegistry
from automock.core.types import TypeKey
from automock.injection import Container, Injector, describe_key
from automock.isolation import IsolationPolicy, IsolationState, PureProxyFactory
from automock.mocker.type_mocker import Selector, TypeMocker
from automock.mocker.verification import Matcher, VerificationQueue

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AutoMocker:
    """Test-double engine over a dependency-injection container.

    Args:
        injector: Container to resolve through; a fresh Injector by default.
        settings: Engine defaults; read from AUTOMOCK_* environment variables
            by default.
    """

    def __init__(
        self,
        injector: Container | None = None,
        settings: MockerSettings | None = None,
    ):
        self.injector: Container = injector if injector is not None else Injector()
        self.settings = settings if settings is not None else MockerSettings()
        self._spies = SpyRegistry()
        self._store = AutoPropertyStore()
        self._interceptor = MemberInterceptor(
            self.injector,
            self._spies,
            self._store,
            warn_on_override=self.settings.warn_on_wildcard_override,
            trace=self.settings.trace_interceptions,
        )
        self._pure_proxies = PureProxyFactory(self.injector, self._interceptor)
        self._isolation = IsolationPolicy(
            self.injector, self._pure_proxies, auto_prop=self.settings.isolation_auto_prop
        )
        self._verifications = VerificationQueue()

    @overload
    def resolve(self, key: type[T]) -> T: ...

    @overload
    def resolve(self, key: str) -> Any: ...

    def resolve(self, key: Any) -> Any:
        """Resolve key through the container, honoring all configuration.

        Raises:
            ResolutionError: Propagated unchanged from the container.
        """
        return self.injector.resolve(key)

    # Wildcard configuration

    def auto_prop(self, key: TypeKey) -> AutoMocker:
        """Give every property of key plain get/set behavior.

        Writing `x.p = v` then reading `x.p` returns v; properties never
        written read as UNDEFINED. Methods keep their real implementation.
        """
        self._interceptor.install_auto_prop(key)
        return self

    def stub(self, key: TypeKey, auto_prop: bool | None = None) -> AutoMocker:
        """Make every method of key return None.

        Properties read None and ignore writes, or behave as auto-properties
        if auto_prop is set. Spies on specific members still take precedence.
        """
        self._interceptor.install_stub(key, self._auto_prop_default(auto_prop))
        return self

    def pure_proxy(self, key: TypeKey, auto_prop: bool | None = None) -> AutoMocker:
        """Resolve key to stubbed stand-ins whose constructor never runs.

        Raises:
            ConfigurationError: If key is not a class that can be allocated
                without its constructor.
        """
        self._pure_proxies.install(key, self._auto_prop_default(auto_prop))
        return self

    def isolate(self, keys: TypeKey | list[TypeKey] | tuple[TypeKey, ...] | set[TypeKey]) -> AutoMocker:
        """Construct only the given keys for real; every other class becomes a pure proxy.

        The first call arms isolation for the lifetime of this AutoMocker;
        later calls extend the allow list.
        """
        if isinstance(keys, (list, tuple, set, frozenset)):
            self._isolation.isolate(keys)
        else:
            self._isolation.isolate([keys])
        return self

    @property
    def isolation_state(self) -> IsolationState:
        return self._isolation.state

    # Member spies

    def mock(self, key: TypeKey, member: Selector[Any]) -> Spy:
        """Spy on calls to one method of key; returns the same spy on every call."""
        return self._interceptor.mock(key, member_name(member))

    def get(self, key: TypeKey, member: Selector[Any]) -> Spy:
        """Spy on reads of one property of key; returns the same spy on every call."""
        return self._interceptor.get(key, member_name(member))

    def set(self, key: TypeKey, member: Selector[Any]) -> Spy:
        """Spy on writes to one property of key; returns the same spy on every call."""
        return self._interceptor.set(key, member_name(member))

    @property
    def spies(self) -> SpyRegistry:
        return self._spies

    # Fluent builder

    @overload
    def type(
        self, key: type[T], configure: Callable[[TypeMocker[T]], Any] | None = None
    ) -> TypeMocker[T]: ...

    @overload
    def type(
        self, key: str, configure: Callable[[TypeMocker[Any]], Any] | None = None
    ) -> TypeMocker[Any]: ...

    def type(self, key: Any, configure: Callable[[TypeMocker[Any]], Any] | None = None) -> TypeMocker[Any]:
        """Start fluent configuration of key, optionally running a setup callback."""
        mocker: TypeMocker[Any] = TypeMocker(key, self)
        if configure is not None:
            configure(mocker)
        return mocker

    # Deferred verification

    def verify(self, spy: Spy, matcher: Matcher) -> None:
        """Queue a check on spy to run at verify_all()."""
        self._verifications.add(spy, matcher)

    def verify_all(self) -> None:
        """Run every queued check.

        Raises:
            VerificationError: Listing every failed check.
        """
        logger.debug("Running %d deferred verification(s)", len(self._verifications))
        self._verifications.run()

    def _auto_prop_default(self, auto_prop: bool | None) -> bool:
        return self.settings.default_auto_prop if auto_prop is None else auto_prop

    def __repr__(self) -> str:
        allowed = ", ".join(describe_key(k) for k in self._isolation.allowed)
        return f"AutoMocker(isolation={self._isolation.state.name}, allowed=[{allowed}])"
