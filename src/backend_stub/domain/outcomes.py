"""Raw outcomes produced by stub rules before body decoding.

A rule either yields a `ValueOutcome` holding a `StubResponse` whose body is
still the raw stubbed value, or a `ThrownOutcome` holding an exception that is
raised (or delivered as a failed completion) only when the request is sent.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..types import HeaderPairs, header_pairs


@dataclass(frozen=True)
class StubResponse:
    """A stubbed response whose body has not been decoded yet."""

    body: object = ""
    code: int = 200
    status_text: str = ""
    headers: HeaderPairs = ()

    @classmethod
    def with_code(
        cls,
        code: int,
        body: object = "",
        *,
        status_text: str = "",
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> StubResponse:
        return cls(body=body, code=code, status_text=status_text, headers=header_pairs(headers))


@dataclass(frozen=True)
class ValueOutcome:
    response: StubResponse


@dataclass(frozen=True)
class ThrownOutcome:
    """A deferred failure; `error` is re-raised unchanged at send time."""

    error: BaseException


RawOutcome = ValueOutcome | ThrownOutcome

DEFAULT_OUTCOME = ValueOutcome(StubResponse(body="", code=404))
