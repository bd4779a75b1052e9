"""Pure-proxy factory: stand-ins that never run the real constructor.

Usage:
    factory.install(ClassThatThrowsInInit, auto_prop=False)
    obj = container.resolve(ClassThatThrowsInInit)  # __init__ never runs
    obj.anything()  # -> None
"""

from __future__ import annotations

import logging
from typing import Any

from automock.core.errors import ConfigurationError
from automock.core.interception import MemberInterceptor
from automock.core.types import TypeKey
from automock.injection import Container, describe_key

logger = logging.getLogger(__name__)


def can_pure_proxy(key: Any) -> bool:
    """Check if key is a class shape a stand-in can be borrowed from.

    String keys and builtin types (int, str, ...) have no class shape to borrow.
    """
    return isinstance(key, type) and key.__module__ != "builtins"


class PureProxyFactory:
    """Registers allocation-only factories for classes and stubs their members.

    Args:
        container: Container to register factories on.
        interceptor: Interceptor used to stub the proxied members.
    """

    def __init__(self, container: Container, interceptor: MemberInterceptor):
        self._container = container
        self._interceptor = interceptor
        self._proxied: dict[type, bool] = {}

    def install(self, key: TypeKey, auto_prop: bool = False) -> None:
        """Resolve key to constructor-less stand-ins with stubbed members.

        Args:
            key: Class to stand in for.
            auto_prop: Use auto-properties instead of null properties.

        Raises:
            ConfigurationError: If key is not a class, or its instances
                cannot be allocated without running the constructor.
        """
        if not isinstance(key, type):
            raise ConfigurationError(
                f"Cannot pure-proxy {describe_key(key)}: key is not a class"
            )
        try:
            cls = self._container.proxy(key).intercepting_class(key)
            _allocate(cls)
        except TypeError as e:
            raise ConfigurationError(
                f"Cannot pure-proxy {key.__qualname__}: instances cannot be "
                f"allocated without the constructor ({e})"
            ) from e

        self._container.register_factory(key, lambda: _allocate(cls))
        self._interceptor.install_stub(key, auto_prop)
        self._proxied[key] = auto_prop
        logger.debug("Pure proxy installed for %s (auto_prop=%s)", key.__qualname__, auto_prop)

    def is_pure_proxy(self, key: Any) -> bool:
        """Check if key was installed as a pure proxy."""
        return isinstance(key, type) and key in self._proxied

    @property
    def proxied(self) -> frozenset[type]:
        """Classes currently resolved to pure proxies."""
        return frozenset(self._proxied)


def _allocate(cls: type) -> Any:
    # object.__new__ skips __init__; raises TypeError for builtin-backed layouts
    return object.__new__(cls)
