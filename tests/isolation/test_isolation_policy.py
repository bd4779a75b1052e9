"""Tests for the isolation policy.

Critical Invariants:
- Allow-listed classes are constructed for real
- Every other class in the graph becomes a pure proxy, so its own
  dependencies are never constructed
- String keys are never redirected
- The policy arms exactly once and never disarms
"""

import pytest

from automock.core import UNDEFINED, AutoPropertyStore, MemberInterceptor, SpyRegistry
from automock.injection import Injector
from automock.isolation import IsolationPolicy, IsolationState, PureProxyFactory
from sample_types import LoginService, Middle, Root, construction_log


@pytest.fixture
def factory(injector):
    interceptor = MemberInterceptor(injector, SpyRegistry(), AutoPropertyStore())
    return PureProxyFactory(injector, interceptor)


@pytest.fixture
def policy(injector, factory):
    return IsolationPolicy(injector, factory)


def test_starts_unarmed(policy, injector):
    assert policy.state is IsolationState.UNARMED
    assert injector.hooks == ()

    injector.resolve(Root)

    assert construction_log == ["Leaf", "Middle", "Root"]


def test_transitive_isolation(policy, injector):
    """CRITICAL: real Root, proxied Middle, Leaf never constructed."""
    policy.isolate([Root])

    root = injector.resolve(Root)

    assert construction_log == ["Root"]
    assert isinstance(root.middle, Middle)
    assert root.middle.leaf is UNDEFINED  # auto-prop, never written
    assert root.run() is None  # stubbed method on the proxy


def test_allow_list_grows_without_rearming(policy, injector):
    policy.isolate([Root])
    policy.isolate([Middle])

    root = injector.resolve(Root)

    assert policy.state is IsolationState.ARMED
    assert len(injector.hooks) == 1
    assert policy.allowed == frozenset({Root, Middle})
    assert construction_log == ["Middle", "Root"]
    assert root.run() == "real middle"


def test_string_keys_are_exempt(policy, injector):
    """String registrations resolve normally even while armed."""
    injector.register_instance("greeting", "hello")
    injector.register("svc", LoginService)
    policy.isolate([Root])

    svc = injector.resolve("svc")

    assert injector.resolve("greeting") == "hello"
    assert svc.service_name == "LoginService"
    with pytest.raises(RuntimeError):
        svc.login("a", "b")


def test_directly_resolved_non_allowed_class_is_proxied(policy, injector):
    policy.isolate([Root])

    svc = injector.resolve(LoginService)

    assert svc.login("a", "b") is None


def test_existing_pure_proxy_choice_is_kept(injector, factory):
    """Isolation does not switch a class the test already pure-proxied."""
    factory.install(Middle, auto_prop=False)
    policy = IsolationPolicy(injector, factory)
    policy.isolate([Root])

    root = injector.resolve(Root)
    root.middle.leaf = "written"

    assert root.middle.leaf is None  # null properties, not auto-prop


def test_isolation_auto_prop_can_be_disabled(injector, factory):
    policy = IsolationPolicy(injector, factory, auto_prop=False)
    policy.isolate([Root])

    root = injector.resolve(Root)

    assert root.middle.leaf is None


def test_hook_on_separate_injector_is_independent(factory):
    """Each policy arms only the container it was given."""
    other = Injector()
    IsolationPolicy(Injector(), factory).isolate([Root])

    other.resolve(Root)

    assert construction_log == ["Leaf", "Middle", "Root"]
