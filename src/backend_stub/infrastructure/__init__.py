"""Effect wrappers and transport integrations."""

from .effects import AsyncioEffect, FutureEffect, IdentityEffect
from .requests_adapter import StubAdapter, build_stub_session

__all__ = [
    "AsyncioEffect",
    "FutureEffect",
    "IdentityEffect",
    "StubAdapter",
    "build_stub_session",
]
