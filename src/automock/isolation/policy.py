"""Isolation policy: only allow-listed classes are built for real.

Once armed, every class requested during resolution that is not on the allow
list is turned into a pure proxy (auto-property mode by default) just before
the container produces it. Because this happens per request, the
dependencies of an allow-listed class are proxied, and their own
dependencies are never requested at all.

Usage:
    policy.isolate([LoginModel])
    model = container.resolve(LoginModel)  # real LoginModel
    model.service                           # pure proxy, __init__ never ran
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum, auto
from typing import Any

from automock.core.types import TypeKey
from automock.injection import Container, describe_key
from automock.isolation.pure_proxy import PureProxyFactory, can_pure_proxy

logger = logging.getLogger(__name__)


class IsolationState(Enum):
    """Whether the policy's resolve hook is installed."""

    UNARMED = auto()  # All keys resolve normally
    ARMED = auto()  # Non-allow-listed classes resolve to pure proxies


class IsolationPolicy:
    """Resolve hook redirecting non-allow-listed classes to pure proxies.

    Gotcha: there is no way back to UNARMED; isolation holds for the rest of
    the policy's lifetime.

    Args:
        container: Container the hook is installed on when armed.
        factory: Pure-proxy factory used for redirected classes.
        auto_prop: Auto-property mode for redirected classes.
    """

    def __init__(self, container: Container, factory: PureProxyFactory, auto_prop: bool = True):
        self._container = container
        self._factory = factory
        self._auto_prop = auto_prop
        self._allowed: set[TypeKey] = set()
        self._state = IsolationState.UNARMED

    @property
    def state(self) -> IsolationState:
        return self._state

    @property
    def allowed(self) -> frozenset[TypeKey]:
        """Keys that are always constructed for real."""
        return frozenset(self._allowed)

    def isolate(self, keys: Iterable[TypeKey]) -> None:
        """Add keys to the allow list, arming the policy on first use."""
        if self._state is IsolationState.UNARMED:
            self._container.add_resolve_hook(self)
            self._state = IsolationState.ARMED
            logger.debug("Isolation armed")
        for key in keys:
            self._allowed.add(key)
            logger.debug("Isolation allows %s", describe_key(key))

    def on_resolve(self, key: Any, stack: tuple[Any, ...]) -> None:
        """Pure-proxy key unless it is allow-listed, already proxied, or not a class."""
        if key in self._allowed or not can_pure_proxy(key):
            return
        if self._factory.is_pure_proxy(key):
            return
        logger.debug(
            "Isolating %s (requested by %s)",
            describe_key(key),
            describe_key(stack[-1]) if stack else "caller",
        )
        self._factory.install(key, auto_prop=self._auto_prop)
