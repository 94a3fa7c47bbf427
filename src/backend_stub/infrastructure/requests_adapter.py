"""Mount a stub on a `requests.Session` in place of the real transport.

Usage example:
    import requests

    from backend_stub.infrastructure.requests_adapter import build_stub_session

    session = build_stub_session(stub)
    response = session.get("http://example.org/a/b/c")
    assert response.status_code == 200
"""

from __future__ import annotations

import io
import json
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from typing_extensions import override

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict
from requests.utils import get_encoding_from_headers

from ..observability import get_logger
from ..response_as import ResponseAsBytes
from ..types import Response, StubRequest
from .effects import IdentityEffect

if TYPE_CHECKING:
    from ..backend import BackendStub

logger = get_logger("backend_stub.infrastructure.requests_adapter")


def to_stub_request(prepared: requests.PreparedRequest) -> StubRequest:
    """Describe a prepared `requests` request as a `StubRequest` decoding to bytes."""
    request = StubRequest.of(
        prepared.method or "GET",
        prepared.url or "",
        headers=dict(prepared.headers),
        body=prepared.body,
    )
    return request.response(ResponseAsBytes())


def _content_for(response: Response) -> tuple[bytes, Mapping[str, str]]:
    if isinstance(response.body, bytes):
        return response.body, {}
    if response.raw_body is None:
        return b"", {}
    try:
        text = json.dumps(response.raw_body)
    except (TypeError, ValueError):
        logger.warning(
            "Stubbed body of type %s cannot be sent as bytes; returning an empty body",
            type(response.raw_body).__name__,
        )
        return b"", {}
    return text.encode("utf-8"), {"Content-Type": "application/json"}


def to_requests_response(
    prepared: requests.PreparedRequest, response: Response
) -> requests.Response:
    """Build a `requests.Response` carrying the stubbed status, headers and body."""
    content, extra_headers = _content_for(response)
    headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(dict(response.headers))
    for name, value in extra_headers.items():
        headers.setdefault(name, value)

    result = requests.Response()
    result.status_code = response.code
    result.reason = response.status_text
    result.headers = headers
    result.encoding = get_encoding_from_headers(headers)
    result.raw = io.BytesIO(content)
    result.url = prepared.url or ""
    result.request = prepared
    return result


class StubAdapter(BaseAdapter):
    """Transport adapter answering every request from a `BackendStub`.

    The stub's rules run synchronously here whatever effect wrapper it was
    built with; producer failures propagate out of `Session.send` unchanged.
    """

    def __init__(self, stub: BackendStub[Any]) -> None:
        super().__init__()
        self._stub: BackendStub[Response] = stub.with_effect(IdentityEffect())

    @override
    def send(
        self,
        request: requests.PreparedRequest,
        stream: bool = False,
        timeout: float | tuple[float, float] | tuple[float, None] | None = None,
        verify: bool | str = True,
        cert: str | tuple[str, str] | None = None,
        proxies: Mapping[str, str] | None = None,
    ) -> requests.Response:
        response = self._stub.send(to_stub_request(request))
        return to_requests_response(request, response)

    @override
    def close(self) -> None:
        pass


def build_stub_session(
    stub: BackendStub[Any], *, session: requests.Session | None = None
) -> requests.Session:
    """Return a session whose http and https traffic is answered by `stub`."""
    session = session or requests.Session()
    adapter = StubAdapter(stub)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session
