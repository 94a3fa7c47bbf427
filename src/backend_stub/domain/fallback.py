"""Resolution of a request against local rules, a parent stub, then the default."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from ..protocols import OutcomeResolver
from ..types import StubRequest
from .outcomes import DEFAULT_OUTCOME, RawOutcome
from .rules import RuleSet

ResolutionSource = Literal["rule", "fallback", "default"]


@dataclass(frozen=True)
class Resolution:
    """Where an outcome came from; `rule_index` is set only for local rules."""

    outcome: RawOutcome
    source: ResolutionSource
    rule_index: int | None = None


@dataclass(frozen=True)
class FallbackChain:
    """Local rules with an optional parent consulted only when none match.

    The parent is shared, not owned: it is only ever asked to resolve, so
    any number of chains may point at the same parent concurrently.
    """

    rules: RuleSet
    fallback: OutcomeResolver | None = None

    def resolve_traced(self, request: StubRequest) -> Resolution:
        found = self.rules.find(request)
        if found is not None:
            index, outcome = found
            return Resolution(outcome, "rule", index)
        if self.fallback is not None:
            return Resolution(self.fallback.resolve(request), "fallback")
        return Resolution(DEFAULT_OUTCOME, "default")

    def resolve(self, request: StubRequest) -> RawOutcome:
        """Return the outcome for `request`; never None."""
        return self.resolve_traced(request).outcome
