"""Effect wrappers deciding how `BackendStub.send` hands back its result.

Usage example:
    from backend_stub.infrastructure.effects import FutureEffect

    stub = BackendStub(effect=FutureEffect())
    future = stub.send(StubRequest.get("http://example.org"))
    response = future.result()
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from typing_extensions import override

from ..protocols import EffectWrapper
from ..types import Response

if TYPE_CHECKING:
    from ..config import StubConfig


class IdentityEffect(EffectWrapper[Response]):
    """Compute in the caller's thread; failures are raised directly."""

    @override
    def wrap(self, compute: Callable[[], Response]) -> Response:
        return compute()

    def __repr__(self) -> str:
        return "IdentityEffect()"


@dataclass(frozen=True)
class FutureEffect(EffectWrapper["Future[Response]"]):
    """Deliver results as `concurrent.futures.Future` objects.

    Without an executor the future is completed before `wrap` returns. With
    one, the computation is submitted to it and completes later. Either way
    the future completes exactly once, with the response or with the very
    exception object the computation raised.
    """

    executor: Executor | None = None

    @classmethod
    def from_config(cls, config: StubConfig) -> Self:
        """Build an effect backed by a thread pool sized from `config`."""
        executor = ThreadPoolExecutor(
            max_workers=config.future_max_workers,
            thread_name_prefix="backend-stub",
        )
        return cls(executor=executor)

    @override
    def wrap(self, compute: Callable[[], Response]) -> Future[Response]:
        if self.executor is not None:
            return self.executor.submit(compute)
        future: Future[Response] = Future()
        try:
            response = compute()
        except Exception as exc:
            future.set_exception(exc)
        else:
            future.set_result(response)
        return future

    def shutdown(self, *, wait: bool = True) -> None:
        if self.executor is not None:
            self.executor.shutdown(wait=wait)


@dataclass(frozen=True)
class AsyncioEffect(EffectWrapper[Awaitable[Response]]):
    """Deliver results as awaitables for asyncio callers.

    Nothing is computed until the awaitable is awaited. With
    `run_in_executor` the computation runs in the loop's default executor.
    """

    run_in_executor: bool = False

    @override
    def wrap(self, compute: Callable[[], Response]) -> Awaitable[Response]:
        return self._run(compute)

    async def _run(self, compute: Callable[[], Response]) -> Response:
        if self.run_in_executor:
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(None, compute)
        return compute()
