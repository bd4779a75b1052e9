"""Member interception: stub, auto-property and spy rules."""

from automock.core.interception.autoprop import AutoPropertyStore
from automock.core.interception.interceptor import MemberInterceptor, PropertyMode

__all__ = [
    "AutoPropertyStore",
    "MemberInterceptor",
    "PropertyMode",
]
