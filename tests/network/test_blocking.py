"""Test that network access is properly blocked in tests."""

import socket

import pytest
import requests

from backend_stub import BackendStub
from backend_stub.infrastructure.requests_adapter import build_stub_session
from tests.support.errors import NetworkIsolationError


class TestNetworkBlocking:
    """Verify that the network blocking fixture works."""

    def test_socket_connect_is_blocked(self) -> None:
        """Attempting to connect a socket should raise NetworkIsolationError."""
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            with pytest.raises(NetworkIsolationError) as exc_info:
                sock.connect(("127.0.0.1", 80))
            assert "Tests must not make network connections" in str(exc_info.value)
        finally:
            sock.close()

    def test_plain_requests_session_is_blocked(self) -> None:
        with pytest.raises(NetworkIsolationError):
            requests.get("http://127.0.0.1:9/get", timeout=1)

    def test_stub_session_needs_no_network(self) -> None:
        session = build_stub_session(BackendStub().when_any_request().then_respond("ok"))

        assert session.get("http://127.0.0.1:9/get").text == "ok"
