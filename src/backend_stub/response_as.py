"""Response-decoding specifications.

A request declares how its response body should be decoded with a small tree
of specs. Leaves describe a target shape; `MappedResponseAs` nodes apply a
transform to whatever their inner spec produced.

Usage example:
    from backend_stub.response_as import as_string

    as_int = as_string().map(int)
    doubled = as_int.map(lambda n: n * 2)
"""

from __future__ import annotations

import codecs
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .exceptions import UnknownCharsetError

T = TypeVar("T")
U = TypeVar("U")

DEFAULT_CHARSET = "utf-8"


def validate_charset(charset: str) -> str:
    """Return the charset unchanged if Python has a text codec for it.

    Codecs such as "base64" or "rot13" exist but do not convert between
    bytes and str, so they are rejected too.
    """
    try:
        info = codecs.lookup(charset)
    except LookupError as exc:
        raise UnknownCharsetError(charset) from exc
    if not getattr(info, "_is_text_encoding", True):
        raise UnknownCharsetError(charset)
    return charset


class ResponseAs(Generic[T]):
    """Base class for every node of the response-decoding tree."""

    def map(self, transform: Callable[[T], U]) -> MappedResponseAs[T, U]:
        """Return a spec that decodes with this one, then applies `transform`."""
        return MappedResponseAs(self, transform)


@dataclass(frozen=True)
class IgnoreResponse(ResponseAs[None]):
    """Discard the body, whatever its shape."""


@dataclass(frozen=True)
class ResponseAsString(ResponseAs[str]):
    """Decode the body as text using `charset`."""

    charset: str = DEFAULT_CHARSET

    def __post_init__(self) -> None:
        validate_charset(self.charset)


@dataclass(frozen=True)
class ResponseAsBytes(ResponseAs[bytes]):
    """Read the body as raw bytes; text bodies are encoded with `charset`."""

    charset: str = DEFAULT_CHARSET

    def __post_init__(self) -> None:
        validate_charset(self.charset)


@dataclass(frozen=True)
class MappedResponseAs(ResponseAs[U], Generic[T, U]):
    """Decode with `inner`, then apply `transform` to the decoded value."""

    inner: ResponseAs[T]
    transform: Callable[[T], U]


IGNORE = IgnoreResponse()


def ignore() -> IgnoreResponse:
    return IGNORE


def as_string(charset: str = DEFAULT_CHARSET) -> ResponseAsString:
    return ResponseAsString(charset)


def as_bytes(charset: str = DEFAULT_CHARSET) -> ResponseAsBytes:
    return ResponseAsBytes(charset)
