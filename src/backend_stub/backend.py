"""Backend stub: a programmable stand-in for an HTTP transport.

A stub is built once with chained, non-mutating calls and then used
read-only, so one stub may serve any number of threads at once.

Usage example:
    from backend_stub import BackendStub, StubRequest
    from backend_stub.matchers import has_param, path_starts_with

    stub = (
        BackendStub()
        .when_request_matches(path_starts_with("a", "b"))
        .then_respond_ok()
        .when_request_matches(has_param("p", "v"))
        .then_respond("10")
    )
    response = stub.send(StubRequest.get("http://example.org/d?p=v").map_response(int))
    assert response.body == 10
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from http import HTTPStatus
from typing import Any, Generic, TypeVar

from .config import StubConfig
from .domain.adjust import adjust_body
from .domain.fallback import FallbackChain, Resolution
from .domain.outcomes import RawOutcome, StubResponse, ThrownOutcome, ValueOutcome
from .domain.rules import (
    MatchRule,
    PartialMatcher,
    PartialRule,
    Predicate,
    Producer,
    RuleSet,
    TotalRule,
)
from .infrastructure.effects import IdentityEffect
from .observability import get_logger
from .protocols import EffectWrapper, OutcomeResolver
from .response_as import ResponseAsString
from .types import DecodeFailure, Response, StubRequest

R = TypeVar("R")
R2 = TypeVar("R2")


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


@dataclass(frozen=True)
class BackendStub(Generic[R]):
    """Ordered rules, an optional fallback stub and an effect wrapper.

    Requests no rule matches go to `fallback` when one is set, else receive
    a 404 response with an empty body.
    """

    effect: EffectWrapper[R] = field(default_factory=IdentityEffect)  # type: ignore[assignment]
    config: StubConfig = field(default_factory=StubConfig)
    name: str = "stub"
    rules: RuleSet = field(default_factory=RuleSet)
    fallback: OutcomeResolver | None = None
    _logger: logging.Logger = field(init=False, repr=False, compare=False)
    _log_threshold: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Stubs with the same name share a logger, so each one filters by its own config.
        logger = get_logger(f"backend_stub.stub.{self.name}", level=logging.DEBUG)
        threshold = logging.getLevelNamesMapping().get(self.config.log_level.upper(), logging.INFO)
        object.__setattr__(self, "_logger", logger)
        object.__setattr__(self, "_log_threshold", threshold)

    @classmethod
    def with_fallback(
        cls,
        parent: OutcomeResolver,
        *,
        effect: EffectWrapper[Any] | None = None,
        config: StubConfig | None = None,
        name: str | None = None,
    ) -> BackendStub[Any]:
        """Create an empty stub that delegates unmatched requests to `parent`.

        The effect wrapper and config are taken from `parent` when it is a
        `BackendStub` and none are given.
        """
        if isinstance(parent, BackendStub):
            effect = parent.effect if effect is None else effect
            config = parent.config if config is None else config
            name = f"{parent.name}.child" if name is None else name
        return cls(
            effect=IdentityEffect() if effect is None else effect,
            config=StubConfig() if config is None else config,
            name="stub" if name is None else name,
            fallback=parent,
        )

    def with_rule(self, rule: MatchRule) -> BackendStub[R]:
        """Return a stub that evaluates `rule` after all existing rules."""
        return replace(self, rules=self.rules.appended(rule))

    def with_effect(self, effect: EffectWrapper[R2]) -> BackendStub[R2]:
        """Return the same rules delivered through a different effect wrapper."""
        return BackendStub(
            effect=effect,
            config=self.config,
            name=self.name,
            rules=self.rules,
            fallback=self.fallback,
        )

    def when_request_matches(self, predicate: Predicate) -> WhenRequest[R]:
        """Begin a rule; complete it with one of the `then_*` methods."""
        return WhenRequest(self, predicate)

    def when_any_request(self) -> WhenRequest[R]:
        return WhenRequest(self, lambda _request: True)

    def when_request_matches_partial(self, matcher: PartialMatcher) -> BackendStub[R]:
        """Add a rule that both decides and responds.

        `matcher` returns None for requests it does not handle. Otherwise it
        returns a body, a `StubResponse`, or a raw outcome. It is called once
        per evaluation.
        """
        return self.with_rule(PartialRule(matcher))

    def resolve(self, request: StubRequest) -> RawOutcome:
        """Return the raw outcome for `request` without decoding or wrapping it."""
        return self._chain().resolve(request)

    def send(self, request: StubRequest) -> R:
        """Produce the response for `request` through the effect wrapper.

        Raises:
            Exception: Whatever a matching rule's producer or a response
                transform raised, when the effect wrapper delivers failures by
                raising. The exception object is the original one.
        """
        return self.effect.wrap(lambda: self._complete(request))

    def _chain(self) -> FallbackChain:
        return FallbackChain(self.rules, self.fallback)

    def _complete(self, request: StubRequest) -> Response:
        resolution = self._chain().resolve_traced(request)
        self._log_resolution(request, resolution)
        match resolution.outcome:
            case ThrownOutcome(error=error):
                self._log(
                    logging.DEBUG,
                    "%s: raising stubbed %s for %s %s",
                    self.name,
                    type(error).__name__,
                    request.method,
                    request.uri,
                )
                raise error
            case ValueOutcome(response=stubbed):
                return self._decode(request, stubbed)

    def _decode(self, request: StubRequest, stubbed: StubResponse) -> Response:
        response_as = request.response_as
        if response_as is None:
            response_as = ResponseAsString(self.config.default_charset)
        adjusted = adjust_body(response_as, stubbed.body)
        body: object
        if adjusted is None:
            body = DecodeFailure(stubbed.body, response_as)
            self._log(logging.DEBUG, "%s: %s", self.name, body.message)
        else:
            body = adjusted.value
        return Response(
            code=stubbed.code,
            body=body,
            status_text=stubbed.status_text or _status_text(stubbed.code),
            headers=stubbed.headers,
            raw_body=stubbed.body,
        )

    def _log(self, level: int, message: str, *args: object) -> None:
        if level >= self._log_threshold:
            self._logger.log(level, message, *args)

    def _log_resolution(self, request: StubRequest, resolution: Resolution) -> None:
        if resolution.source == "rule":
            self._log(
                logging.DEBUG,
                "%s: rule %d matched %s %s",
                self.name,
                resolution.rule_index,
                request.method,
                request.uri,
            )
        elif resolution.source == "fallback":
            self._log(
                logging.DEBUG,
                "%s: no local rule matched %s %s; delegated to fallback",
                self.name,
                request.method,
                request.uri,
            )
        elif self.config.log_unmatched:
            self._log(
                logging.INFO,
                "%s: no rule matched %s %s; responding 404",
                self.name,
                request.method,
                request.uri,
            )


@dataclass(frozen=True)
class WhenRequest(Generic[R]):
    """A rule awaiting its responder; each `then_*` call returns a new stub."""

    stub: BackendStub[R]
    predicate: Predicate

    def then_respond_with(self, producer: Producer) -> BackendStub[R]:
        """Respond with whatever `producer(request)` returns.

        A returned `StubResponse` is used as-is; any other value becomes the
        body of a 200 response. If `producer` raises, sending the request
        raises (or fails) with that exception.
        """
        return self.stub.with_rule(TotalRule(self.predicate, producer))

    def then_respond(
        self,
        body: object = "",
        *,
        code: int = 200,
        status_text: str = "",
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
    ) -> BackendStub[R]:
        if isinstance(body, StubResponse):
            response = body
        else:
            response = StubResponse.with_code(code, body, status_text=status_text, headers=headers)
        return self.then_respond_with(lambda _request: response)

    def then_respond_with_code(self, code: int, body: object = "") -> BackendStub[R]:
        return self.then_respond(body, code=code)

    def then_respond_ok(self) -> BackendStub[R]:
        return self.then_respond_with_code(200)

    def then_respond_not_found(self) -> BackendStub[R]:
        return self.then_respond_with_code(404)

    def then_respond_server_error(self) -> BackendStub[R]:
        return self.then_respond_with_code(500)

    def then_raise(self, error: BaseException) -> BackendStub[R]:
        """Fail matching requests with `error` when they are sent.

        The same exception object is raised on every send, so its traceback
        accumulates and concurrent senders share it. Use `then_respond_with`
        with a producer that raises to get a fresh exception per send.
        """
        outcome = ThrownOutcome(error)
        return self.then_respond_with(lambda _request: outcome)
