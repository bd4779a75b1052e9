"""Auto-property store: plain get/set semantics on intercepted instances.

Each resolved instance gets its own bag, created on first access, so two
instances of the same type never share values.
"""

from __future__ import annotations

from typing import Any

from automock.core.types import UNDEFINED


class AutoPropertyStore:
    """Per-instance property bags keyed by object identity.

    Instances are held by the store for its lifetime, so identities cannot be
    reused while their bag exists. Works for unhashable and non-weakrefable
    objects alike.
    """

    def __init__(self) -> None:
        self._bags: dict[int, tuple[Any, dict[str, Any]]] = {}

    def bag_for(self, obj: Any) -> dict[str, Any]:
        """Get obj's bag, creating an empty one on first use."""
        entry = self._bags.get(id(obj))
        if entry is None:
            entry = (obj, {})
            self._bags[id(obj)] = entry
        return entry[1]

    def read(self, obj: Any, name: str) -> Any:
        """Value last written to name, or UNDEFINED if never written."""
        return self.bag_for(obj).get(name, UNDEFINED)

    def write(self, obj: Any, name: str, value: Any) -> None:
        """Store value under name for obj."""
        self.bag_for(obj)[name] = value

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._bags

    def __len__(self) -> int:
        return len(self._bags)
