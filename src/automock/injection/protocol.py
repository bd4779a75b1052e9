"""Container protocol consumed by the mocking engine.

The engine only needs a narrow slice of a dependency-injection container:
resolve a key, override how a key is produced, reach the per-key proxy, and
observe resolution requests before they are served. Any container exposing
this surface can back an AutoMocker.

Usage:
    class AuditHook:
        def on_resolve(self, key, stack):
            print("resolving", key, "via", stack)

    injector = Injector(hooks=[AuditHook()])
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from automock.injection.models import Lifetime

if TYPE_CHECKING:
    from automock.injection.proxy import ProxyHandle


@runtime_checkable
class ResolveHook(Protocol):
    """Observer invoked once per resolution request, before the instance is produced.

    Hooks may change how the requested key is produced (for example by
    registering a factory for it); the injector reads registrations only
    after every hook has run.
    """

    def on_resolve(self, key: Any, stack: tuple[Any, ...]) -> None:
        """Called with the requested key and the chain of keys being built above it."""
        ...


class Container(Protocol):
    """Resolution surface the engine depends on."""

    def resolve(self, key: Any) -> Any:
        """Produce an instance for key, building its dependencies."""
        ...

    def register_factory(
        self,
        key: Any,
        factory: Callable[[], Any],
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Override how key is produced."""
        ...

    def proxy(self, key: Any) -> ProxyHandle:
        """Get (creating on first use) the intercept rules for key."""
        ...

    def add_resolve_hook(
        self, hook: ResolveHook | Callable[[Any, tuple[Any, ...]], None]
    ) -> None:
        """Append a hook to the resolution chain."""
        ...
