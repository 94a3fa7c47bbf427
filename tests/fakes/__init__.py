"""Exports for test fakes."""

from .effects import RecordingEffect
from .producers import CountingPartial, CountingPredicate, CountingProducer

__all__ = [
    "CountingPartial",
    "CountingPredicate",
    "CountingProducer",
    "RecordingEffect",
]
