"""Tests for the fluent TypeMocker.

Critical Invariants:
- Builder calls return the builder; spy calls return the spy
- Selectors and strings resolve to the same member spy
"""

import pytest

from automock import SelectorParseError, TypeMocker
from sample_types import ClassIDontWantToCreate, LoginModel, LoginService, Person


def test_fluent_stub_and_mock(mkr):
    spy = mkr.type(LoginService).stub(True).mock("login").returns(True)

    vm = mkr.resolve(LoginModel)
    vm.username = "user"
    vm.password = "pass"

    assert vm.submit() is True
    spy.assert_called_once_with("user", "pass")


def test_service_model_scenario(mkr):
    """Model.submit() under normal resolution uses the mocked Service.login."""
    spy = mkr.type(LoginService).mock("login").returns(True)

    model = mkr.resolve(LoginModel)
    model.username = "ada"
    model.password = "secret"

    assert model.submit() is True
    assert spy.call_count == 1
    spy.assert_called_with("ada", "secret")


def test_mock_with_selector(mkr):
    mock_login = mkr.type(LoginService)
    mock_login.stub(True)
    spy = mock_login.mock(lambda c: c.login).returns(True)

    vm = mkr.resolve(LoginModel)
    vm.username = "user"
    vm.password = "pass"

    assert vm.submit() is True
    assert spy.called


def test_selector_and_string_share_spy(mkr):
    builder = mkr.type(LoginService)

    assert builder.mock("login") is builder.mock(lambda s: s.login)
    assert builder.get("service_name") is builder.get(lambda s: s.service_name)


def test_get_overrides_property_default(mkr):
    mkr.type(LoginService).get(lambda c: c.service_name).returns("Override")

    vm = mkr.resolve(LoginModel)

    assert vm.get_service_name() == "Override"


def test_set_records_writes(mkr):
    spy_setter = mkr.type(Person).set(lambda p: p.firstname)

    person = mkr.resolve(Person)
    person.firstname = "...something new"

    spy_setter.assert_called_once_with("...something new")


def test_get_with_property_object(mkr):
    mkr.type(Person).get(Person.fullname).returns("Ada Lovelace")

    assert mkr.resolve(Person).fullname == "Ada Lovelace"


def test_pure_proxy_chain(mkr):
    mkr.type(ClassIDontWantToCreate).pure_proxy(False).mock(lambda t: t.throw_error).returns(1)

    obj = mkr.resolve(ClassIDontWantToCreate)

    assert obj.throw_error() == 1


def test_auto_prop_builder(mkr):
    mkr.type(Person).auto_prop()

    person = mkr.resolve(Person)
    person.firstname = "A"

    assert person.firstname == "A"


def test_stub_returns_builder(mkr):
    builder = mkr.type(LoginModel)

    assert builder.stub() is builder
    assert builder.key is LoginModel


def test_stubbed_model_with_mocked_method(mkr):
    model_mock = mkr.type(LoginModel)
    model_mock.stub()
    model_mock.mock(lambda p: p.is_valid).returns(True)

    model = mkr.resolve(LoginModel)

    assert model.is_valid() is True
    assert model.submit() is None


def test_configure_callback(mkr):
    seen = []

    builder = mkr.type(LoginService, lambda m: seen.append(m))

    assert seen == [builder]
    assert isinstance(builder, TypeMocker)


def test_configure_method_allows_multi_line_setup(mkr):
    def setup(m):
        m.stub()
        m.mock("logout").returns("bye")

    mkr.type(LoginService).configure(setup)
    svc = mkr.resolve(LoginService)

    assert svc.logout() == "bye"
    assert svc.login("a", "b") is None


def test_spy_configure_callback_can_defer_verification(mkr):
    def configure(spy, verify):
        spy.returns(True)
        verify(lambda s: s.assert_called_once_with("u", "p"))

    mkr.type(LoginService).mock("login", configure)

    assert mkr.resolve(LoginService).login("u", "p") is True
    mkr.verify_all()


def test_get_and_set_configure_callbacks(mkr):
    def configure_get(spy, verify):
        spy.returns("configured")

    calls = []
    mkr.type(Person).get("firstname", configure_get)
    mkr.type(Person).set("lastname", lambda spy, verify: calls.append(spy))

    assert mkr.resolve(Person).firstname == "configured"
    assert len(calls) == 1


def test_bad_selector_raises(mkr):
    with pytest.raises(SelectorParseError):
        mkr.type(Person).get(lambda p: p.firstname + p.lastname)


def test_repr(mkr):
    assert "LoginService" in repr(mkr.type(LoginService))
