"""Protocol definitions for the seams a stub is assembled from.

These protocols keep the matching engine independent of how requests are
modelled and of how results are delivered (immediately, as a future, or as an
awaitable).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .domain.outcomes import RawOutcome
    from .types import Response, StubRequest

R_co = TypeVar("R_co", covariant=True)


@runtime_checkable
class UriReader(Protocol):
    """The parts of a request target that rules may inspect."""

    @property
    def path(self) -> Sequence[str]:
        """Path segments in order, without empty segments."""
        ...

    @property
    def params_map(self) -> Mapping[str, str]:
        """Query parameters by name."""
        ...


@runtime_checkable
class RequestReader(Protocol):
    """Read-only view of a request used by predicates."""

    @property
    def method(self) -> str:
        """Upper-case HTTP method."""
        ...

    @property
    def uri(self) -> UriReader:
        """Parsed request target."""
        ...

    def header(self, name: str) -> str | None:
        """Return the first header value for `name`, if present."""
        ...


@runtime_checkable
class OutcomeResolver(Protocol):
    """Anything that can turn a request into a raw outcome; stubs act as fallbacks through this."""

    def resolve(self, request: StubRequest) -> RawOutcome:
        """Return the outcome for `request`, never None."""
        ...


@runtime_checkable
class EffectWrapper(Protocol[R_co]):
    """Delivers the result of a send in a caller-chosen shape."""

    def wrap(self, compute: Callable[[], Response]) -> R_co:
        """Run or schedule `compute`.

        Exceptions raised by `compute` must reach the caller unchanged, either
        raised directly or as the failure of the returned handle.
        """
        ...
