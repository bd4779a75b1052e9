"""Core building blocks of the mocking engine.

Architecture Note:
    core/ holds the per-member substitution machinery: spies, property bags,
    interception rules and selector parsing. The stateful policies built on
    top of it live in isolation/ and mocker/.
"""

from automock.core.errors import AutoMockError, ConfigurationError, SelectorParseError
from automock.core.interception import AutoPropertyStore, MemberInterceptor, PropertyMode
from automock.core.selector import member_name, parse_lambda
from automock.core.spy import Spy, SpyRegistry
from automock.core.types import UNDEFINED, MemberSelector, TypeKey

__all__ = [
    # Types
    "UNDEFINED",
    "MemberSelector",
    "TypeKey",
    # Errors
    "AutoMockError",
    "ConfigurationError",
    "SelectorParseError",
    # Spies
    "Spy",
    "SpyRegistry",
    # Interception
    "AutoPropertyStore",
    "MemberInterceptor",
    "PropertyMode",
    # Selectors
    "member_name",
    "parse_lambda",
]
