"""Composable request predicates for `when_request_matches`.

Usage example:
    from backend_stub.matchers import all_of, method_is, path_starts_with

    stub.when_request_matches(all_of(method_is("GET"), path_starts_with("a", "b")))
"""

from __future__ import annotations

from collections.abc import Callable

from .protocols import RequestReader

RequestPredicate = Callable[[RequestReader], bool]


def any_request(_request: RequestReader) -> bool:
    return True


def method_is(*methods: str) -> RequestPredicate:
    wanted = frozenset(m.upper() for m in methods)

    def predicate(request: RequestReader) -> bool:
        return request.method.upper() in wanted

    return predicate


def path_is(*segments: str) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        return tuple(request.uri.path) == segments

    return predicate


def path_starts_with(*segments: str) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        return tuple(request.uri.path[: len(segments)]) == segments

    return predicate


def path_ends_with(*segments: str) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        path = tuple(request.uri.path)
        if len(segments) > len(path):
            return False
        return path[len(path) - len(segments) :] == segments

    return predicate


def has_param(name: str, value: str | None = None) -> RequestPredicate:
    """Match a query parameter; with `value`, it must also equal that value."""

    def predicate(request: RequestReader) -> bool:
        params = request.uri.params_map
        if name not in params:
            return False
        return value is None or params[name] == value

    return predicate


def has_header(name: str, value: str | None = None) -> RequestPredicate:
    """Match a header case-insensitively; with `value`, it must also equal that value."""

    def predicate(request: RequestReader) -> bool:
        actual = request.header(name)
        if actual is None:
            return False
        return value is None or actual == value

    return predicate


def all_of(*predicates: RequestPredicate) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        return all(p(request) for p in predicates)

    return predicate


def any_of(*predicates: RequestPredicate) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        return any(p(request) for p in predicates)

    return predicate


def negate(inner: RequestPredicate) -> RequestPredicate:
    def predicate(request: RequestReader) -> bool:
        return not inner(request)

    return predicate
