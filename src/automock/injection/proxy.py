"""Per-key object proxies.

Interception works by moving a resolved instance onto a generated subclass of
its own class. The subclass overrides __getattribute__ and __setattr__ to
consult the rules registered on the key's ProxyHandle, so isinstance checks
keep passing and methods running on the instance see the same interception
through `self`.

Usage:
    handle = injector.proxy(LoginService)
    handle.method("login").instead(lambda obj, name, args, kwargs: True)
    handle.get(WILDCARD).instead(lambda obj, name: None)

    svc = injector.resolve(LoginService)
    svc.login("user", "secret")  # -> True, real login never runs

Member classification:
    A name whose static class attribute is a routine (function, staticmethod,
    classmethod, builtin method) takes the METHOD path; everything else
    (properties, instance data, unknown names) takes the GET path.
    Specific rules are matched before wildcards. Dunder names are never
    intercepted.
"""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Callable
from typing import Any

from automock.injection.models import WILDCARD, InterceptKind, InterceptRule

_HANDLE_ATTR = "__automock_handle__"
_BASE_ATTR = "__automock_base__"

_METHOD_TYPES = (
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodDescriptorType,
    types.WrapperDescriptorType,
    types.ClassMethodDescriptorType,
    staticmethod,
    classmethod,
    functools.partialmethod,
    functools.singledispatchmethod,
)


def is_dunder(name: str) -> bool:
    """Check if name is a special (__x__) attribute."""
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def is_method(cls: type, name: str) -> bool:
    """Check if name is defined on cls as a routine rather than data.

    Uses static lookup so properties and descriptors are never triggered.
    """
    attr = inspect.getattr_static(cls, name, None)
    return isinstance(attr, _METHOD_TYPES)


def real_getattr(obj: Any, name: str) -> Any:
    """Read an attribute bypassing the rules of obj's own proxy."""
    base = getattr(type(obj), _BASE_ATTR, type(obj))
    return base.__getattribute__(obj, name)


def real_setattr(obj: Any, name: str, value: Any) -> None:
    """Write an attribute bypassing the rules of obj's own proxy."""
    base = getattr(type(obj), _BASE_ATTR, type(obj))
    base.__setattr__(obj, name, value)


def handle_of(obj: Any) -> ProxyHandle | None:
    """Get the ProxyHandle intercepting obj, or None for plain objects."""
    return getattr(type(obj), _HANDLE_ATTR, None)


class RuleBuilder:
    """Pending rule for one (kind, member); completed by instead()."""

    def __init__(self, handle: ProxyHandle, kind: InterceptKind, member: str):
        self._handle = handle
        self._kind = kind
        self._member = member

    def instead(self, handler: Callable[..., Any]) -> ProxyHandle:
        """Install handler for this member, replacing any earlier rule."""
        self._handle.add_rule(InterceptRule(self._kind, self._member, handler))
        return self._handle


class ProxyHandle:
    """Intercept rules for one resolution key.

    Rules are looked up live on every access, so rules added after an
    instance was resolved still apply to it.

    Args:
        key: Resolution key these rules belong to.
    """

    def __init__(self, key: Any):
        self.key = key
        self._rules: dict[tuple[InterceptKind, str], InterceptRule] = {}
        self._classes: dict[type, type] = {}

    def get(self, member: str = WILDCARD) -> RuleBuilder:
        """Start a property-read rule. Handler: (obj, name) -> value."""
        return RuleBuilder(self, InterceptKind.GET, member)

    def set(self, member: str = WILDCARD) -> RuleBuilder:
        """Start a property-write rule. Handler: (obj, name, value) -> None."""
        return RuleBuilder(self, InterceptKind.SET, member)

    def method(self, member: str = WILDCARD) -> RuleBuilder:
        """Start a method-call rule. Handler: (obj, name, args, kwargs) -> result."""
        return RuleBuilder(self, InterceptKind.METHOD, member)

    def add_rule(self, rule: InterceptRule) -> None:
        """Install a rule; last registration for (kind, member) wins."""
        self._rules[(rule.kind, rule.member)] = rule

    def rule_for(
        self, kind: InterceptKind, member: str, *, specific_only: bool = False
    ) -> InterceptRule | None:
        """Find the rule for member, falling back to the wildcard rule.

        Args:
            kind: Access path to look up.
            member: Member name.
            specific_only: If True, never fall back to the wildcard.

        Returns:
            Matching rule, or None if the real behavior should run.
        """
        rule = self._rules.get((kind, member))
        if rule is None and not specific_only:
            rule = self._rules.get((kind, WILDCARD))
        return rule

    def rules(self) -> tuple[InterceptRule, ...]:
        """All installed rules, in installation order."""
        return tuple(self._rules.values())

    def intercepting_class(self, base: type) -> type:
        """Get the generated subclass of base that routes access through this handle.

        Raises:
            TypeError: If base cannot be subclassed (e.g. bool).
        """
        cls = self._classes.get(base)
        if cls is None:
            cls = _build_intercepting_class(self, base)
            self._classes[base] = cls
        return cls

    def attach(self, instance: Any) -> Any:
        """Route instance through this handle's rules by swapping its class.

        Returns:
            The same instance, now intercepted.

        Raises:
            TypeError: If the instance's class cannot be swapped (builtins).
        """
        if handle_of(instance) is self:
            return instance
        cls = self.intercepting_class(type(instance))
        try:
            object.__setattr__(instance, "__class__", cls)
        except TypeError as e:
            raise TypeError(
                f"Cannot intercept instance of {type(instance).__name__}: {e}"
            ) from e
        return instance


def _bind(rule: InterceptRule, obj: Any, name: str) -> Callable[..., Any]:
    def intercepted(*args: Any, **kwargs: Any) -> Any:
        return rule.handler(obj, name, args, kwargs)

    intercepted.__name__ = intercepted.__qualname__ = name
    return intercepted


def _build_intercepting_class(handle: ProxyHandle, base: type) -> type:
    def __getattribute__(self: Any, name: str) -> Any:
        if not is_dunder(name):
            method = handle.rule_for(InterceptKind.METHOD, name, specific_only=True)
            getter = None
            if method is None:
                getter = handle.rule_for(InterceptKind.GET, name, specific_only=True)
            if method is None and getter is None:
                if is_method(base, name):
                    method = handle.rule_for(InterceptKind.METHOD, WILDCARD)
                else:
                    getter = handle.rule_for(InterceptKind.GET, WILDCARD)
            if method is not None:
                return _bind(method, self, name)
            if getter is not None:
                return getter.handler(self, name)
        return base.__getattribute__(self, name)

    def __setattr__(self: Any, name: str, value: Any) -> None:
        if not is_dunder(name):
            setter = handle.rule_for(InterceptKind.SET, name)
            if setter is not None:
                setter.handler(self, name, value)
                return
        base.__setattr__(self, name, value)

    namespace = {
        "__slots__": (),
        "__module__": base.__module__,
        "__qualname__": base.__qualname__,
        "__getattribute__": __getattribute__,
        "__setattr__": __setattr__,
        _HANDLE_ATTR: handle,
        _BASE_ATTR: base,
    }
    cls = types.new_class(base.__name__, (base,), exec_body=lambda ns: ns.update(namespace))
    # Abstract bases must still be allocatable as stand-ins
    if getattr(cls, "__abstractmethods__", None):
        cls.__abstractmethods__ = frozenset()
    return cls
