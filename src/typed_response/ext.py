from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .capture import acapture, capture
from .protocols import AsyncHttpResponse, SyncHttpResponse
from .response import TypedResponse

__all__ = ["AsyncResponseExt", "ResponseExt"]


@dataclass(frozen=True, slots=True)
class ResponseExt:
    """Method-style access to :func:`capture` for a blocking response."""

    response: SyncHttpResponse

    def try_from_response(self) -> TypedResponse[Any, Any]:
        return capture(self.response)


@dataclass(frozen=True, slots=True)
class AsyncResponseExt:
    """Method-style access to :func:`acapture` for an async response."""

    response: AsyncHttpResponse

    async def try_from_response(self) -> TypedResponse[Any, Any]:
        return await acapture(self.response)
