"""Isolation: pure proxies and the allow-list resolution policy."""

from automock.isolation.policy import IsolationPolicy, IsolationState
from automock.isolation.pure_proxy import PureProxyFactory, can_pure_proxy

__all__ = [
    "IsolationPolicy",
    "IsolationState",
    "PureProxyFactory",
    "can_pure_proxy",
]
