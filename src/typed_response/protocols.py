from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, Self

import msgspec

__all__ = ["AsyncHttpResponse", "FromDecodeError", "SyncHttpResponse"]


class _HttpResponse(Protocol):
    @property
    def status_code(self) -> int: ...

    @property
    def is_server_error(self) -> bool: ...

    @property
    def extensions(self) -> MutableMapping[str, Any]: ...

    def raise_for_status(self) -> Any: ...


class SyncHttpResponse(_HttpResponse, Protocol):
    def read(self) -> bytes: ...


class AsyncHttpResponse(_HttpResponse, Protocol):
    async def aread(self) -> bytes: ...


class FromDecodeError(Protocol):
    """Failure types that can stand in for a body they failed to decode."""

    @classmethod
    def from_decode_error(cls, exc: msgspec.DecodeError) -> Self: ...
