"""Spies: call recorders and their per-member registry."""

from automock.core.spy.models import Spy
from automock.core.spy.registry import SpyRegistry

__all__ = [
    "Spy",
    "SpyRegistry",
]
