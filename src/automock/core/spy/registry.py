"""Spy registry: at most one spy per (key, access path, member)."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from automock.core.spy.models import Spy
from automock.core.types import TypeKey
from automock.injection import InterceptKind, describe_key

logger = logging.getLogger(__name__)


class SpyRegistry:
    """Memoizes spies so repeated configuration of a member composes.

    The first registration for a (key, kind, member) fixes the spy's
    identity; later requests return the same object, and return-value
    changes made through any reference apply to every caller.
    """

    def __init__(self) -> None:
        self._spies: dict[TypeKey, dict[tuple[InterceptKind, str], Spy]] = {}

    def get(self, key: TypeKey, kind: InterceptKind, member: str) -> Spy | None:
        """Get the spy for a member if one was created."""
        return self._spies.get(key, {}).get((kind, member))

    def get_or_create(
        self,
        key: TypeKey,
        kind: InterceptKind,
        member: str,
        install: Callable[[Spy], None],
    ) -> Spy:
        """Get the member's spy, creating and installing it on first request.

        Args:
            key: Resolution key the member belongs to.
            kind: Access path the spy intercepts.
            member: Member name.
            install: Called once with the new spy to wire its interception.

        Returns:
            The member's spy.
        """
        spy = self.get(key, kind, member)
        if spy is None:
            spy = Spy(name=_spy_name(key, kind, member))
            install(spy)
            self._spies.setdefault(key, {})[(kind, member)] = spy
            logger.debug("Created %s spy for %s.%s", kind.name, describe_key(key), member)
        return spy

    def spies_for(self, key: TypeKey) -> dict[tuple[InterceptKind, str], Spy]:
        """All spies created for key."""
        return dict(self._spies.get(key, {}))

    def __iter__(self) -> Iterator[Spy]:
        for spies in self._spies.values():
            yield from spies.values()

    def __len__(self) -> int:
        return sum(len(spies) for spies in self._spies.values())


def _spy_name(key: TypeKey, kind: InterceptKind, member: str) -> str:
    owner = key.__name__ if isinstance(key, type) else str(key)
    if kind is InterceptKind.METHOD:
        return f"{owner}.{member}"
    return f"{owner}.{member} ({kind.name.lower()})"
