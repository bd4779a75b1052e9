"""Member interceptor: stub, auto-property and spy rules on a key's proxy.

Wildcard behaviors (install_stub, install_auto_prop) cover every member
without a specific rule. Spy rules (mock, get, set) are member-specific and
always take precedence, whichever order they were installed in.

Usage:
    interceptor.install_stub(LoginService)
    spy = interceptor.mock(LoginService, "logout").returns(True)

    svc = container.resolve(LoginService)
    svc.login("a", "b")  # -> None (stubbed)
    svc.logout()         # -> True (spy)
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from enum import Enum, auto
from typing import Any

from automock.core.errors import ConfigurationError
from automock.core.interception.autoprop import AutoPropertyStore
from automock.core.spy import Spy, SpyRegistry
from automock.core.types import TypeKey
from automock.injection import (
    WILDCARD,
    Container,
    InterceptKind,
    describe_key,
    is_dunder,
    real_getattr,
    real_setattr,
)

logger = logging.getLogger(__name__)


class PropertyMode(Enum):
    """Wildcard behavior for property reads and writes on a key."""

    NULL = auto()  # Reads return None, writes discarded
    AUTO = auto()  # Reads/writes go through the instance's property bag


def _return_none(obj: Any, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
    return None


def _read_none(obj: Any, name: str) -> None:
    return None


def _discard(obj: Any, name: str, value: Any) -> None:
    return None


class MemberInterceptor:
    """Installs intercept rules on the container's per-key proxies.

    Args:
        container: Container owning the proxies.
        spies: Registry memoizing spies per member.
        store: Property bags used in auto-property mode.
        warn_on_override: Warn when a key's property wildcard switches mode.
        trace: Log every interception at DEBUG level.
    """

    def __init__(
        self,
        container: Container,
        spies: SpyRegistry,
        store: AutoPropertyStore,
        *,
        warn_on_override: bool = True,
        trace: bool = False,
    ):
        self._container = container
        self._spies = spies
        self._store = store
        self._warn_on_override = warn_on_override
        self._trace = trace
        self._modes: dict[TypeKey, PropertyMode] = {}

    def property_mode(self, key: TypeKey) -> PropertyMode | None:
        """Current property wildcard mode for key, or None if never installed."""
        return self._modes.get(key)

    # Wildcards

    def install_stub(self, key: TypeKey, auto_prop: bool = False) -> None:
        """Make every method return None; properties return None or auto-prop.

        Args:
            key: Key to stub.
            auto_prop: Use auto-properties instead of null properties.
        """
        handle = self._container.proxy(key)
        handle.method(WILDCARD).instead(self._handler(key, InterceptKind.METHOD, _return_none))
        if auto_prop:
            self.install_auto_prop(key)
            return
        self._switch_mode(key, PropertyMode.NULL)
        handle.get(WILDCARD).instead(self._handler(key, InterceptKind.GET, _read_none))
        handle.set(WILDCARD).instead(self._handler(key, InterceptKind.SET, _discard))
        logger.debug("Stubbed %s", describe_key(key))

    def install_auto_prop(self, key: TypeKey) -> None:
        """Route every property read/write through the instance's property bag.

        Reading a property that was never written returns UNDEFINED.
        """
        handle = self._container.proxy(key)
        self._switch_mode(key, PropertyMode.AUTO)
        handle.get(WILDCARD).instead(self._handler(key, InterceptKind.GET, self._store.read))
        handle.set(WILDCARD).instead(self._handler(key, InterceptKind.SET, self._store.write))
        logger.debug("Auto-properties enabled for %s", describe_key(key))

    # Member spies

    def mock(self, key: TypeKey, member: str) -> Spy:
        """Spy on method calls to member; the spy's value is returned to the caller."""
        self._check_member(key, member)

        def install(spy: Spy) -> None:
            def on_call(obj: Any, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
                result = spy(*args, **kwargs)
                if spy.passes_through:
                    return real_getattr(obj, name)(*args, **kwargs)
                return result

            handle = self._container.proxy(key)
            handle.method(member).instead(self._handler(key, InterceptKind.METHOD, on_call))

        return self._spies.get_or_create(key, InterceptKind.METHOD, member, install)

    def get(self, key: TypeKey, member: str) -> Spy:
        """Spy on reads of member; each read calls the spy with no arguments."""
        self._check_member(key, member)

        def install(spy: Spy) -> None:
            def on_get(obj: Any, name: str) -> Any:
                result = spy()
                if spy.passes_through:
                    return real_getattr(obj, name)
                return result

            handle = self._container.proxy(key)
            handle.get(member).instead(self._handler(key, InterceptKind.GET, on_get))

        return self._spies.get_or_create(key, InterceptKind.GET, member, install)

    def set(self, key: TypeKey, member: str) -> Spy:
        """Spy on writes to member; each write calls the spy with the value.

        The write is discarded unless the spy calls through.
        """
        self._check_member(key, member)

        def install(spy: Spy) -> None:
            def on_set(obj: Any, name: str, value: Any) -> None:
                spy(value)
                if spy.passes_through:
                    real_setattr(obj, name, value)

            handle = self._container.proxy(key)
            handle.set(member).instead(self._handler(key, InterceptKind.SET, on_set))

        return self._spies.get_or_create(key, InterceptKind.SET, member, install)

    # Helpers

    def _check_member(self, key: TypeKey, member: str) -> None:
        if member == WILDCARD or is_dunder(member):
            raise ConfigurationError(
                f"Cannot spy on '{member}' of {describe_key(key)}: "
                f"wildcards and special methods are not interceptable members"
            )

    def _switch_mode(self, key: TypeKey, mode: PropertyMode) -> None:
        previous = self._modes.get(key)
        if previous is not None and previous is not mode and self._warn_on_override:
            warnings.warn(
                f"Property behavior of {describe_key(key)} switched from "
                f"{previous.name} to {mode.name}. Member-specific spies are kept.",
                stacklevel=4,
            )
        self._modes[key] = mode

    def _handler(
        self, key: TypeKey, kind: InterceptKind, fn: Callable[..., Any]
    ) -> Callable[..., Any]:
        if not self._trace:
            return fn

        def traced(obj: Any, name: str, *rest: Any) -> Any:
            logger.debug("Intercepted %s %s.%s", kind.name, describe_key(key), name)
            return fn(obj, name, *rest)

        return traced
