"""Core type definitions for automock."""

from __future__ import annotations

from typing import Any, Final

type TypeKey = type | str
"""Resolution key: a class, or a string registered on the injector.

Classes compare by identity and strings by value; keys are never matched
structurally.
"""

type MemberSelector = str | property | Any
"""Member reference: a name, a property, a method reference, or `lambda x: x.member`."""


class _Undefined:
    """Marker for a value that was never set, distinct from an explicit None."""

    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = object.__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"


UNDEFINED: Final = _Undefined()
"""Returned by auto-properties that were never written."""
