"""automock: test doubles for dependency-injected object graphs.

Usage:
    from automock import AutoMocker

    class LoginService:
        def login(self, user: str, password: str) -> bool:
            raise RuntimeError("talks to the network")

    class LoginModel:
        def __init__(self, service: LoginService):
            self.service = service

        def submit(self) -> bool:
            return self.service.login("user", "secret")

    mocker = AutoMocker()
    spy = mocker.type(LoginService).mock(lambda s: s.login).returns(True)

    model = mocker.resolve(LoginModel)
    assert model.submit() is True
    spy.assert_called_once_with("user", "secret")
"""

__version__ = "0.1.0"

# Configuration
from automock.config import MockerSettings

# Core primitives
from automock.core import (
    UNDEFINED,
    AutoMockError,
    ConfigurationError,
    SelectorParseError,
    Spy,
    TypeKey,
    member_name,
)

# Container
from automock.injection import (
    WILDCARD,
    Injector,
    Lifetime,
    ProxyHandle,
    ResolutionError,
    ResolveHook,
)

# Isolation
from automock.isolation import IsolationState

# Engine
from automock.mocker import AutoMocker, TypeMocker, VerificationError

__all__ = [
    # Version
    "__version__",
    # Engine
    "AutoMocker",
    "TypeMocker",
    "VerificationError",
    "IsolationState",
    "MockerSettings",
    # Core
    "UNDEFINED",
    "Spy",
    "TypeKey",
    "member_name",
    "AutoMockError",
    "ConfigurationError",
    "SelectorParseError",
    # Container
    "WILDCARD",
    "Injector",
    "Lifetime",
    "ProxyHandle",
    "ResolutionError",
    "ResolveHook",
]
