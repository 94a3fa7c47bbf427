"""Pytest fixtures shared across the backend-stub test-suite.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from backend_stub import BackendStub, StubResponse
from backend_stub.matchers import has_param, method_is, path_starts_with
from backend_stub.types import Method, StubRequest
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    raise NetworkIsolationError(repr(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Stubs never perform I/O, so any socket connection is a bug in the test
    or in the library. Use `build_stub_session` to exercise `requests` code.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


def _partial_rules(request: StubRequest) -> StubResponse | None:
    match (request.method, request.uri.path):
        case (Method.POST, (*_, "partial10")):
            return StubResponse("10")
        case (Method.POST, (*_, "partialAda")):
            return StubResponse("Ada")
        case _:
            return None


@pytest.fixture
def testing_stub() -> BackendStub[object]:
    """Stub with overlapping rules, evaluated in declaration order."""
    return (
        BackendStub(name="testing")
        .when_request_matches(path_starts_with("a", "b"))
        .then_respond_ok()
        .when_request_matches(has_param("p", "v"))
        .then_respond("10")
        .when_request_matches(method_is(Method.GET))
        .then_respond_server_error()
        .when_request_matches_partial(_partial_rules)
    )
