"""Tests for the request, URI and response data model."""

from __future__ import annotations

import dataclasses

import pytest

from backend_stub.response_as import IgnoreResponse, MappedResponseAs, ResponseAsString
from backend_stub.types import DecodeFailure, Response, StubRequest, Uri


class TestUri:
    def test_parse_splits_path_and_query(self) -> None:
        uri = Uri.parse("https://example.org:8443/a//b/?p=v&p=w&x=1#frag")

        assert uri.scheme == "https"
        assert uri.host == "example.org"
        assert uri.port == 8443
        assert uri.path == ("a", "b")
        assert uri.params == (("p", "v"), ("p", "w"), ("x", "1"))
        assert uri.fragment == "frag"

    def test_params_map_keeps_last_value(self) -> None:
        uri = Uri.parse("http://example.org/?p=v&p=w")

        assert uri.params_map == {"p": "w"}

    def test_params_map_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            Uri.parse("http://example.org/?p=v").params_map["p"] = "x"  # type: ignore[index]

    def test_str_renders_url(self) -> None:
        assert str(Uri.parse("http://example.org/d?p=v")) == "http://example.org/d?p=v"


class TestStubRequest:
    def test_constructors_set_method(self) -> None:
        assert StubRequest.get("http://a").method == "GET"
        assert StubRequest.post("http://a").method == "POST"
        assert StubRequest.put("http://a").method == "PUT"
        assert StubRequest.delete("http://a").method == "DELETE"
        assert StubRequest.patch("http://a").method == "PATCH"
        assert StubRequest.head("http://a").method == "HEAD"
        assert StubRequest.options("http://a").method == "OPTIONS"
        assert StubRequest.of("get", "http://a").method == "GET"

    def test_request_is_immutable(self) -> None:
        request = StubRequest.get("http://a")

        with pytest.raises(dataclasses.FrozenInstanceError):
            request.method = "POST"  # type: ignore[misc]

    def test_map_response_wraps_default_text_spec(self) -> None:
        request = StubRequest.get("http://a").map_response(int)

        assert isinstance(request.response_as, MappedResponseAs)
        assert request.response_as.inner == ResponseAsString()
        assert request.response_as.transform is int

    def test_map_response_wraps_declared_spec(self) -> None:
        request = StubRequest.get("http://a").response(IgnoreResponse()).map_response(str)

        assert isinstance(request.response_as, MappedResponseAs)
        assert request.response_as.inner == IgnoreResponse()

    def test_map_response_leaves_original_untouched(self) -> None:
        original = StubRequest.get("http://a")

        original.map_response(int)

        assert original.response_as is None


class TestResponse:
    def test_success_range(self) -> None:
        assert Response(code=204).is_success
        assert not Response(code=301).is_success
        assert not Response(code=404).is_success

    def test_decode_failure_marks_response_undecoded(self) -> None:
        failure = DecodeFailure(10, ResponseAsString())
        response = Response(code=200, body=failure)

        assert not response.is_decoded
        assert "int" in failure.message
        assert "ResponseAsString" in failure.message

    def test_header_lookup_is_case_insensitive(self) -> None:
        response = Response(code=200, headers=(("Content-Type", "text/plain"),))

        assert response.header("content-type") == "text/plain"
        assert response.header("missing") is None
