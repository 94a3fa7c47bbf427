"""Tests for coercing stubbed bodies into requested response shapes."""

from __future__ import annotations

import io

import pytest

from backend_stub.domain.adjust import Adjusted, adjust_body
from backend_stub.exceptions import UnknownCharsetError
from backend_stub.response_as import (
    IgnoreResponse,
    MappedResponseAs,
    ResponseAsBytes,
    ResponseAsString,
)

TEXT = "Hello, world!"
UTF8 = ResponseAsString("utf-8")


class TestIgnoreResponse:
    """Ignoring the body always succeeds."""

    @pytest.mark.parametrize("raw", [TEXT, b"bytes", 10, None, object(), io.BytesIO(b"x")])
    def test_any_raw_value_adjusts_to_none(self, raw: object) -> None:
        assert adjust_body(IgnoreResponse(), raw) == Adjusted(None)


class TestResponseAsString:
    """Text decoding accepts text, bytes and streams only."""

    def test_text_is_returned_unchanged(self) -> None:
        assert adjust_body(UTF8, TEXT) == Adjusted(TEXT)

    def test_bytes_are_decoded(self) -> None:
        assert adjust_body(UTF8, TEXT.encode("utf-8")) == Adjusted(TEXT)

    def test_bytearray_is_decoded(self) -> None:
        assert adjust_body(UTF8, bytearray(TEXT, "utf-8")) == Adjusted(TEXT)

    def test_binary_stream_is_read_and_decoded(self) -> None:
        assert adjust_body(UTF8, io.BytesIO(TEXT.encode("utf-8"))) == Adjusted(TEXT)

    def test_text_stream_is_read(self) -> None:
        assert adjust_body(UTF8, io.StringIO(TEXT)) == Adjusted(TEXT)

    def test_charset_is_honoured(self) -> None:
        raw = "café".encode("latin-1")

        assert adjust_body(ResponseAsString("latin-1"), raw) == Adjusted("café")

    def test_integer_is_not_text(self) -> None:
        assert adjust_body(UTF8, 10) is None

    def test_undecodable_bytes_do_not_adjust(self) -> None:
        assert adjust_body(UTF8, b"\xff\xfe\xfa") is None

    def test_stream_is_consumed_once(self) -> None:
        stream = io.BytesIO(TEXT.encode("utf-8"))

        assert adjust_body(UTF8, stream) == Adjusted(TEXT)
        assert adjust_body(UTF8, stream) == Adjusted("")

    def test_unknown_charset_is_rejected_when_spec_is_built(self) -> None:
        with pytest.raises(UnknownCharsetError):
            ResponseAsString("no-such-charset")

    @pytest.mark.parametrize("charset", ["base64", "hex", "rot13"])
    def test_non_text_codec_is_rejected_when_spec_is_built(self, charset: str) -> None:
        with pytest.raises(UnknownCharsetError):
            ResponseAsString(charset)


class TestResponseAsBytes:
    """Byte decoding accepts bytes, streams and encodable text."""

    def test_bytes_are_returned(self) -> None:
        assert adjust_body(ResponseAsBytes(), b"abc") == Adjusted(b"abc")

    def test_text_is_encoded(self) -> None:
        assert adjust_body(ResponseAsBytes(), TEXT) == Adjusted(TEXT.encode("utf-8"))

    def test_binary_stream_is_read(self) -> None:
        assert adjust_body(ResponseAsBytes(), io.BytesIO(b"abc")) == Adjusted(b"abc")

    def test_text_stream_is_read_and_encoded(self) -> None:
        raw = io.StringIO("café")

        assert adjust_body(ResponseAsBytes("latin-1"), raw) == Adjusted("café".encode("latin-1"))

    def test_unencodable_text_does_not_adjust(self) -> None:
        assert adjust_body(ResponseAsBytes("ascii"), "café") is None

    def test_lone_surrogate_does_not_adjust(self) -> None:
        assert adjust_body(ResponseAsBytes(), "\ud800") is None

    def test_unencodable_text_stream_does_not_adjust(self) -> None:
        assert adjust_body(ResponseAsBytes("ascii"), io.StringIO("café")) is None

    def test_non_text_codec_is_rejected_when_spec_is_built(self) -> None:
        with pytest.raises(UnknownCharsetError):
            ResponseAsBytes("base64")

    def test_dict_is_not_bytes(self) -> None:
        assert adjust_body(ResponseAsBytes(), {"a": 1}) is None


class TestMappedResponseAs:
    """Mapped specs adjust the inner spec, then transform."""

    def test_mapped_text_is_transformed(self) -> None:
        assert adjust_body(MappedResponseAs(UTF8, int), "10") == Adjusted(10)

    def test_inner_mismatch_fails_mapped_spec(self) -> None:
        assert adjust_body(MappedResponseAs(UTF8, int), 10) is None

    def test_transform_not_called_on_inner_mismatch(self) -> None:
        calls: list[str] = []

        def transform(text: str) -> str:
            calls.append(text)
            return text

        adjust_body(UTF8.map(transform), 10)

        assert calls == []

    def test_nested_maps_compose_in_order(self) -> None:
        spec = UTF8.map(int).map(lambda n: n * 2)

        assert adjust_body(spec, "10") == Adjusted(20)

    def test_mapped_ignore_receives_none(self) -> None:
        assert adjust_body(IgnoreResponse().map(lambda v: v is None), 10) == Adjusted(True)

    def test_transform_failure_propagates(self) -> None:
        with pytest.raises(ValueError):
            adjust_body(MappedResponseAs(UTF8, int), "not a number")
