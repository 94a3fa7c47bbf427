"""Request, URI and response data model consumed and produced by stubs.

Usage example:
    from backend_stub.types import StubRequest

    request = StubRequest.get("http://example.org/d?p=v").map_response(int)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Self
from urllib.parse import parse_qsl, urlsplit

from .response_as import ResponseAs, ResponseAsString


class Method:
    """HTTP method names as plain upper-case strings."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"


HeaderPairs = tuple[tuple[str, str], ...]


def header_pairs(headers: Mapping[str, str] | Iterable[tuple[str, str]] | None) -> HeaderPairs:
    if headers is None:
        return ()
    if isinstance(headers, Mapping):
        return tuple((str(k), str(v)) for k, v in headers.items())
    return tuple((str(k), str(v)) for k, v in headers)


def _find_header(headers: HeaderPairs, name: str) -> str | None:
    wanted = name.lower()
    for key, value in headers:
        if key.lower() == wanted:
            return value
    return None


@dataclass(frozen=True)
class Uri:
    """Parsed request target; only `path` and `params` take part in matching."""

    scheme: str = "http"
    host: str = ""
    port: int | None = None
    path: tuple[str, ...] = ()
    params: tuple[tuple[str, str], ...] = ()
    fragment: str = ""

    @classmethod
    def parse(cls, url: str) -> Self:
        parts = urlsplit(url)
        return cls(
            scheme=parts.scheme or "http",
            host=parts.hostname or "",
            port=parts.port,
            path=tuple(segment for segment in parts.path.split("/") if segment),
            params=tuple(parse_qsl(parts.query, keep_blank_values=True)),
            fragment=parts.fragment,
        )

    @property
    def params_map(self) -> Mapping[str, str]:
        """Query parameters as a read-only mapping; the last value wins."""
        return MappingProxyType(dict(self.params))

    def __str__(self) -> str:
        netloc = self.host if self.port is None else f"{self.host}:{self.port}"
        text = f"{self.scheme}://{netloc}/" + "/".join(self.path)
        if self.params:
            text += "?" + "&".join(f"{k}={v}" for k, v in self.params)
        if self.fragment:
            text += f"#{self.fragment}"
        return text


@dataclass(frozen=True)
class StubRequest:
    """Immutable description of an outgoing request.

    `response_as` is None when the caller did not declare a decoding; the
    stub then decodes the body as text in its configured default charset.
    """

    method: str
    uri: Uri
    headers: HeaderPairs = ()
    body: object = None
    response_as: ResponseAs[Any] | None = None

    @classmethod
    def of(
        cls,
        method: str,
        url: str | Uri,
        *,
        headers: Mapping[str, str] | Iterable[tuple[str, str]] | None = None,
        body: object = None,
    ) -> Self:
        uri = url if isinstance(url, Uri) else Uri.parse(url)
        return cls(method=method.upper(), uri=uri, headers=header_pairs(headers), body=body)

    @classmethod
    def get(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.GET, url, **kwargs)

    @classmethod
    def head(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.HEAD, url, **kwargs)

    @classmethod
    def post(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.POST, url, **kwargs)

    @classmethod
    def put(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.PUT, url, **kwargs)

    @classmethod
    def delete(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.DELETE, url, **kwargs)

    @classmethod
    def options(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.OPTIONS, url, **kwargs)

    @classmethod
    def patch(cls, url: str | Uri, **kwargs: Any) -> Self:
        return cls.of(Method.PATCH, url, **kwargs)

    def header(self, name: str) -> str | None:
        """Return the first header value for `name` (case-insensitive)."""
        return _find_header(self.headers, name)

    def response(self, response_as: ResponseAs[Any]) -> Self:
        """Return a copy of this request decoding its response with `response_as`."""
        return replace(self, response_as=response_as)

    def map_response(self, transform: Callable[[Any], Any]) -> Self:
        """Return a copy whose decoded body is passed through `transform`.

        Without an explicit `response_as` the mapping applies to the default
        text decoding.
        """
        base = self.response_as if self.response_as is not None else ResponseAsString()
        return replace(self, response_as=base.map(transform))


@dataclass(frozen=True)
class DecodeFailure:
    """Body placeholder for a stubbed value that the requested spec cannot decode."""

    raw: object
    response_as: ResponseAs[Any]

    @property
    def message(self) -> str:
        return (
            f"Stubbed body of type {type(self.raw).__name__} cannot be decoded "
            f"as {type(self.response_as).__name__}"
        )


@dataclass(frozen=True)
class Response:
    """Response handed back to client code by `BackendStub.send`.

    `body` holds the decoded value, or a `DecodeFailure` when the stubbed value
    does not fit the request's response spec.
    """

    code: int
    body: object = None
    status_text: str = ""
    headers: HeaderPairs = ()
    raw_body: object = field(default=None, repr=False, compare=False)

    @property
    def is_success(self) -> bool:
        return 200 <= self.code < 300

    @property
    def is_decoded(self) -> bool:
        return not isinstance(self.body, DecodeFailure)

    def header(self, name: str) -> str | None:
        """Return the first header value for `name` (case-insensitive)."""
        return _find_header(self.headers, name)
