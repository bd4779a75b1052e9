"""Tests for the AutoMocker facade.

Critical Invariants:
- Stubbed types return None from every method and property
- Auto-propped types read back written values, and UNDEFINED otherwise
- Spy identity is stable per member for the lifetime of the mocker
- Isolation only constructs allow-listed types
- Errors from real code and from the container propagate unchanged
"""

import pytest

from automock import (
    UNDEFINED,
    AutoMocker,
    ConfigurationError,
    Injector,
    IsolationState,
    MockerSettings,
    ResolutionError,
    SelectorParseError,
)
from sample_types import (
    ClassIDontWantToCreate,
    Leaf,
    LoginModel,
    LoginService,
    LoginValidator,
    Middle,
    Person,
    Root,
    construction_log,
)


def test_uses_given_injector(settings):
    injector = Injector()
    mkr = AutoMocker(injector, settings)

    assert mkr.injector is injector


def test_creates_injector_by_default(mkr):
    assert isinstance(mkr.injector, Injector)


def test_configuration_calls_chain(mkr):
    assert mkr.stub(LoginService).auto_prop(Person).pure_proxy(Leaf) is mkr


# Stub / auto-prop scenarios


def test_stubbed_service_returns_none(mkr):
    """Service.login on a stubbed Service returns None, not True/False."""
    mkr.stub(LoginService)

    svc = mkr.resolve(LoginService)

    assert svc.login("x", "y") is None


def test_stubbed_properties_return_none_and_discard_writes(mkr):
    mkr.stub(Person)

    person = mkr.resolve(Person)
    person.firstname = "...something new"

    assert person.firstname is None
    assert person.fullname is None


def test_auto_prop_person_scenario(mkr):
    """Derived accessors are not computed under auto-prop; they read UNDEFINED."""
    mkr.auto_prop(Person)

    person = mkr.resolve(Person)
    person.firstname = "A"
    person.lastname = "B"

    assert person.firstname == "A"
    assert person.lastname == "B"
    assert person.fullname is UNDEFINED
    assert person.fullname is not None


def test_specific_mock_over_stub(mkr):
    mkr.stub(LoginService)
    logout = mkr.mock(LoginService, "logout").returns(True)

    svc = mkr.resolve(LoginService)

    assert svc.login("", "") is None
    assert svc.logout() is True
    logout.assert_called_once()


def test_default_auto_prop_from_settings():
    mkr = AutoMocker(settings=MockerSettings(_env_file=None, default_auto_prop=True))
    mkr.stub(Person)

    person = mkr.resolve(Person)
    person.firstname = "kept"

    assert person.firstname == "kept"


def test_explicit_auto_prop_overrides_settings():
    mkr = AutoMocker(settings=MockerSettings(_env_file=None, default_auto_prop=True))
    mkr.stub(Person, auto_prop=False)

    person = mkr.resolve(Person)
    person.firstname = "dropped"

    assert person.firstname is None


# Spies


def test_mock_identity_is_stable(mkr):
    """CRITICAL: mock() twice returns one spy; later configuration applies through both."""
    first = mkr.mock(LoginService, "login")
    second = mkr.mock(LoginService, "login")
    second.returns(True)

    assert first is second
    assert mkr.resolve(LoginService).login("a", "b") is True
    first.assert_called_once_with("a", "b")


def test_mock_configured_after_resolution(mkr):
    svc = mkr.resolve(LoginModel).service
    mkr.mock(LoginService, "login").returns("late")

    # Proxy did not exist at resolution time, so this instance is plain
    with pytest.raises(RuntimeError):
        svc.login("a", "b")
    assert mkr.resolve(LoginService).login("a", "b") == "late"


def test_get_and_set_spies(mkr):
    getter = mkr.get(Person, lambda p: p.firstname).returns("Setup")
    setter = mkr.set(Person, "lastname")

    person = mkr.resolve(Person)
    person.lastname = "Lovelace"

    assert person.firstname == "Setup"
    getter.assert_called_once_with()
    setter.assert_called_once_with("Lovelace")


def test_mock_accepts_method_reference(mkr):
    spy = mkr.mock(LoginService, LoginService.logout).returns("ref")

    assert mkr.resolve(LoginService).logout() == "ref"
    assert spy.called


def test_malformed_selector_raises(mkr):
    with pytest.raises(SelectorParseError):
        mkr.mock(LoginService, lambda s: s.login("a", "b"))


def test_spies_are_listed(mkr):
    mkr.mock(LoginService, "login")
    mkr.get(Person, "firstname")

    assert len(mkr.spies) == 2


# Pure proxy and isolation


def test_pure_proxy_with_mocked_method(mkr):
    mkr.pure_proxy(ClassIDontWantToCreate)
    mkr.mock(ClassIDontWantToCreate, "throw_error").returns(1)

    assert mkr.resolve(ClassIDontWantToCreate).throw_error() == 1


def test_pure_proxy_rejects_string_key(mkr):
    with pytest.raises(ConfigurationError):
        mkr.pure_proxy("service")


def test_isolate_single_type(mkr):
    mkr.isolate(LoginModel)

    vm = mkr.resolve(LoginModel)
    vm.username = "test"
    vm.password = "test"

    assert vm.is_valid() is True  # real code
    assert vm.submit() is None  # proxied service


def test_isolate_multiple_types(mkr):
    mkr.isolate([LoginModel, LoginValidator])

    vm = mkr.resolve(LoginModel)

    assert vm.submit_with_external_validation() is False  # real validator said no
    vm.username = vm.password = "test"
    assert vm.submit_with_external_validation() is None  # proxied service


def test_isolate_accepts_tuples_and_sets(mkr):
    mkr.isolate((Root,)).isolate({Middle})

    mkr.resolve(Root)

    assert construction_log == ["Middle", "Root"]


def test_isolation_state(mkr):
    assert mkr.isolation_state is IsolationState.UNARMED

    mkr.isolate(Root)

    assert mkr.isolation_state is IsolationState.ARMED
    assert "Root" in repr(mkr)


def test_isolated_proxies_can_still_be_mocked(mkr):
    mkr.isolate(LoginModel)
    mkr.type(ClassIDontWantToCreate).mock(lambda c: c.dummy_method).returns(5)

    tst = mkr.resolve(ClassIDontWantToCreate)

    assert tst.dummy_method() == 5
    assert tst.throw_error() is None


# Error propagation


def test_resolution_errors_propagate(mkr):
    with pytest.raises(ResolutionError):
        mkr.resolve("unregistered")


def test_real_errors_propagate(mkr):
    """Errors thrown by real, non-isolated code reach the test unchanged."""
    with pytest.raises(RuntimeError, match="don't call this"):
        mkr.resolve(ClassIDontWantToCreate)


def test_mockers_do_not_share_state(settings):
    first = AutoMocker(settings=settings)
    second = AutoMocker(settings=settings)
    first.stub(LoginService)

    with pytest.raises(RuntimeError):
        second.resolve(LoginService).login("a", "b")
