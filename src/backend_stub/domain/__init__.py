"""Pure matching and body-adjustment logic."""

from .adjust import Adjusted, adjust_body
from .fallback import FallbackChain, Resolution
from .outcomes import DEFAULT_OUTCOME, RawOutcome, StubResponse, ThrownOutcome, ValueOutcome
from .rules import MatchRule, PartialRule, RuleSet, TotalRule

__all__ = [
    "DEFAULT_OUTCOME",
    "Adjusted",
    "FallbackChain",
    "MatchRule",
    "PartialRule",
    "RawOutcome",
    "Resolution",
    "RuleSet",
    "StubResponse",
    "ThrownOutcome",
    "TotalRule",
    "ValueOutcome",
    "adjust_body",
]
