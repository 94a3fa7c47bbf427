"""Coerce raw stubbed bodies into the shape a response spec asks for.

`adjust_body` never raises for a shape mismatch; it returns None instead.
Exceptions raised by a `MappedResponseAs` transform propagate unchanged.

A stream body is read once. Adjusting the same stream again yields whatever
is left in it, which is the caller's concern.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ..response_as import (
    IgnoreResponse,
    MappedResponseAs,
    ResponseAs,
    ResponseAsBytes,
    ResponseAsString,
)

T = TypeVar("T")


@dataclass(frozen=True)
class Adjusted(Generic[T]):
    """A successfully coerced body; `value` may legitimately be None."""

    value: T


def _read_stream(stream: io.IOBase) -> object:
    read = getattr(stream, "read", None)
    return read() if callable(read) else None


def _encode(text: str, charset: str) -> bytes | None:
    try:
        return text.encode(charset)
    except UnicodeError:
        return None


def _as_bytes(raw: object, charset: str) -> bytes | None:
    match raw:
        case bytes():
            return raw
        case bytearray() | memoryview():
            return bytes(raw)
        case str():
            return _encode(raw, charset)
        case io.TextIOBase():
            text = _read_stream(raw)
            return _encode(text, charset) if isinstance(text, str) else None
        case io.IOBase():
            data = _read_stream(raw)
            return data if isinstance(data, bytes) else None
        case _:
            return None


def _as_text(raw: object, charset: str) -> str | None:
    if isinstance(raw, str):
        return raw
    if isinstance(raw, io.TextIOBase):
        data = _read_stream(raw)
        return data if isinstance(data, str) else None
    data = _as_bytes(raw, charset)
    if data is None:
        return None
    try:
        return data.decode(charset)
    except UnicodeError:
        return None


def adjust_body(response_as: ResponseAs[T], raw: object) -> Adjusted[T] | None:
    """Try to convert `raw` into the type `response_as` decodes to.

    Args:
        response_as: The decoding spec declared by the request.
        raw: The stubbed body (text, bytes, a stream or any other object).

    Returns:
        `Adjusted` holding the converted value, or None when `raw` cannot be
        represented as the requested type.
    """
    result: Adjusted[Any] | None
    match response_as:
        case IgnoreResponse():
            result = Adjusted(None)
        case ResponseAsString(charset=charset):
            text = _as_text(raw, charset)
            result = None if text is None else Adjusted(text)
        case ResponseAsBytes(charset=charset):
            data = _as_bytes(raw, charset)
            result = None if data is None else Adjusted(data)
        case MappedResponseAs(inner=inner, transform=transform):
            inner_result = adjust_body(inner, raw)
            result = None if inner_result is None else Adjusted(transform(inner_result.value))
        case _:
            raise TypeError(f"Unsupported response spec: {response_as!r}")
    return result
