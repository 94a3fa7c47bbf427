"""Ordered request-matching rules.

Two rule kinds share one ordered list:

- `TotalRule` pairs a predicate with a producer. The producer runs only when
  the predicate holds.
- `PartialRule` wraps one callable that both decides and produces. Returning
  None means the rule is not defined for the request. The callable is invoked
  once per evaluation, so side effects inside it are observed once.

A producer (or partial callable) that raises still counts as a match: the
exception is captured as a `ThrownOutcome` and raised when the request is
sent. Predicate exceptions are not captured.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..types import StubRequest
from .outcomes import RawOutcome, StubResponse, ThrownOutcome, ValueOutcome

Predicate = Callable[[StubRequest], bool]
Producer = Callable[[StubRequest], object]
PartialMatcher = Callable[[StubRequest], object | None]


def _to_outcome(value: object) -> RawOutcome:
    match value:
        case ValueOutcome() | ThrownOutcome():
            return value
        case StubResponse():
            return ValueOutcome(value)
        case _:
            return ValueOutcome(StubResponse(body=value))


def _produce(producer: Callable[[StubRequest], object], request: StubRequest) -> RawOutcome | None:
    try:
        value = producer(request)
    except Exception as exc:
        return ThrownOutcome(exc)
    if value is None:
        return None
    return _to_outcome(value)


@dataclass(frozen=True)
class TotalRule:
    predicate: Predicate
    producer: Producer

    def try_match(self, request: StubRequest) -> RawOutcome | None:
        if not self.predicate(request):
            return None
        outcome = _produce(self.producer, request)
        # A total producer answering None still owns the request: 200 with a None body.
        return outcome if outcome is not None else ValueOutcome(StubResponse(body=None))


@dataclass(frozen=True)
class PartialRule:
    matcher: PartialMatcher

    def try_match(self, request: StubRequest) -> RawOutcome | None:
        return _produce(self.matcher, request)


MatchRule = TotalRule | PartialRule


@dataclass(frozen=True)
class RuleSet:
    """Immutable, insertion-ordered collection of rules."""

    rules: tuple[MatchRule, ...] = ()

    def __len__(self) -> int:
        return len(self.rules)

    def appended(self, rule: MatchRule) -> RuleSet:
        """Return a new rule set with `rule` evaluated after all existing rules."""
        return RuleSet(self.rules + (rule,))

    def find(self, request: StubRequest) -> tuple[int, RawOutcome] | None:
        """Return the index and outcome of the first rule matching `request`."""
        for index, rule in enumerate(self.rules):
            outcome = rule.try_match(request)
            if outcome is not None:
                return index, outcome
        return None

    def match(self, request: StubRequest) -> RawOutcome | None:
        found = self.find(request)
        return None if found is None else found[1]
