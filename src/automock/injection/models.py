"""Injection models: lifetimes, registrations, and intercept rules."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

WILDCARD = "*"
"""Member sentinel matching any member without a more specific rule."""


class Lifetime(Enum):
    """How long a resolved instance is reused."""

    TRANSIENT = auto()  # New instance per resolve
    SINGLETON = auto()  # One instance per injector


class InterceptKind(Enum):
    """Which access path an intercept rule replaces."""

    GET = auto()
    SET = auto()
    METHOD = auto()


@dataclass(frozen=True, slots=True)
class InterceptRule:
    """Replacement behavior for one member (or WILDCARD) on one access path.

    Handler signatures by kind:
        GET:    handler(obj, name) -> value
        SET:    handler(obj, name, value) -> None
        METHOD: handler(obj, name, args, kwargs) -> result
    """

    kind: InterceptKind
    member: str
    handler: Callable[..., Any]

    @property
    def is_wildcard(self) -> bool:
        return self.member == WILDCARD


@dataclass(slots=True)
class Registration:
    """How the injector produces instances for a key.

    Exactly one of implementation, factory or instance is used, checked in
    the order instance, factory, implementation.
    """

    key: Any
    implementation: type | None = None
    factory: Callable[[], Any] | None = None
    instance: Any = None
    has_instance: bool = False
    lifetime: Lifetime = Lifetime.TRANSIENT
