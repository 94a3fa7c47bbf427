"""Programmable stand-in for an HTTP client backend."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from .backend import BackendStub, WhenRequest
from .config import StubConfig
from .domain import StubResponse, ThrownOutcome, ValueOutcome, adjust_body
from .infrastructure import AsyncioEffect, FutureEffect, IdentityEffect, build_stub_session
from .response_as import (
    IgnoreResponse,
    MappedResponseAs,
    ResponseAs,
    ResponseAsBytes,
    ResponseAsString,
    as_bytes,
    as_string,
    ignore,
)
from .types import DecodeFailure, Method, Response, StubRequest, Uri

_PACKAGE_NAME = "backend-stub"


def _resolve_version() -> str:
    try:
        return version(_PACKAGE_NAME)
    except PackageNotFoundError:
        return "0.0.0+unknown"


__version__ = _resolve_version()

__all__ = [
    "AsyncioEffect",
    "BackendStub",
    "DecodeFailure",
    "FutureEffect",
    "IdentityEffect",
    "IgnoreResponse",
    "MappedResponseAs",
    "Method",
    "Response",
    "ResponseAs",
    "ResponseAsBytes",
    "ResponseAsString",
    "StubConfig",
    "StubRequest",
    "StubResponse",
    "ThrownOutcome",
    "Uri",
    "ValueOutcome",
    "WhenRequest",
    "adjust_body",
    "as_bytes",
    "as_string",
    "build_stub_session",
    "ignore",
]
