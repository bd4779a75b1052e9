"""Constructor-injection container with per-key proxies and resolve hooks.

Usage:
    class Repo: ...

    class Service:
        def __init__(self, repo: Repo, retries: int = 3):
            self.repo = repo

    injector = Injector()
    svc = injector.resolve(Service)          # Repo built from type hints
    injector.register_instance("dsn", "sqlite://")
    injector.register(Repo, lifetime=Lifetime.SINGLETON)

Resolution order for a key:
    1. Every resolve hook sees (key, stack), in installation order.
    2. The key's registration (instance, factory or implementation) produces
       the instance; unregistered classes are built from their constructor.
    3. If a ProxyHandle exists for the key, the instance is attached to it.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar, overload

from automock.injection.models import Lifetime, Registration
from automock.injection.protocol import ResolveHook
from automock.injection.proxy import ProxyHandle

logger = logging.getLogger(__name__)

T = TypeVar("T")

type HookLike = ResolveHook | Callable[[Any, tuple[Any, ...]], None]


class ResolutionError(Exception):
    """Raised when a key cannot be resolved to an instance."""

    pass


def describe_key(key: Any) -> str:
    """Readable name for a resolution key."""
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)


class Injector:
    """Dependency-injection container owning registrations, proxies and hooks.

    Args:
        hooks: Resolve hooks installed at construction, run in order.
    """

    def __init__(self, hooks: Iterable[HookLike] = ()):
        self._registrations: dict[Any, Registration] = {}
        self._singletons: dict[Any, Any] = {}
        self._proxies: dict[Any, ProxyHandle] = {}
        self._hooks: list[HookLike] = []
        for hook in hooks:
            self.add_resolve_hook(hook)

    # Registration

    def register(
        self,
        key: Any,
        implementation: type | None = None,
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Map key to a class built by constructor injection.

        Args:
            key: Class or string key.
            implementation: Class to build; defaults to key itself.
            lifetime: TRANSIENT or SINGLETON.

        Raises:
            ResolutionError: If no class is given for a non-class key.
        """
        implementation = implementation if implementation is not None else key
        if not isinstance(implementation, type):
            raise ResolutionError(
                f"Cannot register {describe_key(key)}: implementation must be a class"
            )
        self._replace(key, Registration(key, implementation=implementation, lifetime=lifetime))

    def register_factory(
        self,
        key: Any,
        factory: Callable[[], Any],
        *,
        lifetime: Lifetime = Lifetime.TRANSIENT,
    ) -> None:
        """Override how key is produced with a zero-argument factory."""
        self._replace(key, Registration(key, factory=factory, lifetime=lifetime))

    def register_instance(self, key: Any, instance: Any) -> None:
        """Always resolve key to the given instance."""
        self._replace(
            key,
            Registration(key, instance=instance, has_instance=True, lifetime=Lifetime.SINGLETON),
        )

    def is_registered(self, key: Any) -> bool:
        """Check if key has an explicit registration."""
        return key in self._registrations

    def _replace(self, key: Any, registration: Registration) -> None:
        self._registrations[key] = registration
        self._singletons.pop(key, None)
        logger.debug("Registered %s", describe_key(key))

    # Proxies and hooks

    def proxy(self, key: Any) -> ProxyHandle:
        """Get the intercept rules for key, creating an empty set on first use."""
        handle = self._proxies.get(key)
        if handle is None:
            handle = ProxyHandle(key)
            self._proxies[key] = handle
            logger.debug("Created proxy for %s", describe_key(key))
        return handle

    def has_proxy(self, key: Any) -> bool:
        """Check if intercept rules exist for key."""
        return key in self._proxies

    def add_resolve_hook(self, hook: HookLike) -> None:
        """Append a hook to the resolution chain.

        Args:
            hook: ResolveHook instance or plain callable(key, stack).
        """
        self._hooks.append(hook)

    @property
    def hooks(self) -> tuple[HookLike, ...]:
        """Installed resolve hooks, in call order."""
        return tuple(self._hooks)

    # Resolution

    @overload
    def resolve(self, key: type[T]) -> T: ...

    @overload
    def resolve(self, key: str) -> Any: ...

    def resolve(self, key: Any) -> Any:
        """Produce an instance for key, resolving constructor dependencies.

        Raises:
            ResolutionError: If key is unregistered and not a class, a
                constructor parameter cannot be satisfied, or the graph has a cycle.
        """
        return self._resolve(key, ())

    def _resolve(self, key: Any, stack: tuple[Any, ...]) -> Any:
        if any(key is k or key == k for k in stack):
            chain = " -> ".join(describe_key(k) for k in (*stack, key))
            raise ResolutionError(f"Dependency cycle: {chain}")

        for hook in self._hooks:
            if isinstance(hook, ResolveHook):
                hook.on_resolve(key, stack)
            else:
                hook(key, stack)

        registration = self._registrations.get(key)
        if registration is None:
            if not isinstance(key, type):
                raise ResolutionError(f"No registration for {describe_key(key)}")
            registration = Registration(key, implementation=key)

        singleton = registration.lifetime is Lifetime.SINGLETON
        if singleton and key in self._singletons:
            return self._singletons[key]

        instance = self._produce(registration, (*stack, key))
        handle = self._proxies.get(key)
        if handle is not None:
            try:
                instance = handle.attach(instance)
            except TypeError as e:
                raise ResolutionError(str(e)) from e

        if singleton:
            self._singletons[key] = instance
        return instance

    def _produce(self, registration: Registration, stack: tuple[Any, ...]) -> Any:
        if registration.has_instance:
            return registration.instance
        if registration.factory is not None:
            return registration.factory()
        assert registration.implementation is not None
        return self._construct(registration.implementation, stack)

    def _construct(self, cls: type, stack: tuple[Any, ...]) -> Any:
        try:
            signature = inspect.signature(cls, eval_str=True)
        except ValueError:
            return cls()
        except NameError as e:
            raise ResolutionError(
                f"Cannot read constructor annotations of {cls.__qualname__}: {e}"
            ) from e

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for name, param in signature.parameters.items():
            if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue
            dependency = param.annotation
            has_default = param.default is not param.empty
            resolvable = dependency is not param.empty and (
                self.is_registered(dependency) or isinstance(dependency, type)
            )
            if has_default and not (resolvable and self.is_registered(dependency)):
                continue
            if not resolvable:
                raise ResolutionError(
                    f"Cannot resolve parameter '{name}' of {cls.__qualname__}: "
                    f"no injectable annotation"
                )
            value = self._resolve(dependency, stack)
            if param.kind is param.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[name] = value

        logger.debug("Constructing %s", cls.__qualname__)
        return cls(*args, **kwargs)
