"""Dependency injection: container, per-key proxies, and resolve hooks."""

from automock.injection.injector import Injector, ResolutionError, describe_key
from automock.injection.models import (
    WILDCARD,
    InterceptKind,
    InterceptRule,
    Lifetime,
    Registration,
)
from automock.injection.protocol import Container, ResolveHook
from automock.injection.proxy import (
    ProxyHandle,
    RuleBuilder,
    handle_of,
    is_dunder,
    is_method,
    real_getattr,
    real_setattr,
)

__all__ = [
    # Models
    "WILDCARD",
    "InterceptKind",
    "InterceptRule",
    "Lifetime",
    "Registration",
    # Protocols
    "Container",
    "ResolveHook",
    # Container
    "Injector",
    "ResolutionError",
    "describe_key",
    # Proxy
    "ProxyHandle",
    "RuleBuilder",
    "handle_of",
    "is_dunder",
    "is_method",
    "real_getattr",
    "real_setattr",
]
