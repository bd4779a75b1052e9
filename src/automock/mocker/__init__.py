"""Engine facade, fluent type builder, and deferred verification."""

from automock.mocker.auto_mocker import AutoMocker
from automock.mocker.type_mocker import TypeMocker
from automock.mocker.verification import VerificationError, VerificationQueue

__all__ = [
    "AutoMocker",
    "TypeMocker",
    "VerificationError",
    "VerificationQueue",
]
