"""Turn a live response handle into a :class:`TypedResponse`.

The blocking and async entry points share one generator routine. It yields
exactly once, when it needs the body, and the driver answers with the bytes
read either on the calling thread or by awaiting the collaborator.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import httpx

from .logging import get_logger
from .protocols import AsyncHttpResponse, SyncHttpResponse
from .response import Disposition, TypedResponse

logger = get_logger(__name__)

CAPTURED_EXTENSION = "typed_response.captured"

__all__ = ["CAPTURED_EXTENSION", "acapture", "capture"]

_Capture = Generator[None, bytes, "TypedResponse[Any, Any]"]


def _request_url(response: Any) -> str | None:
    try:
        return str(response.request.url)
    except (AttributeError, RuntimeError):
        return None


def _capture_steps(response: SyncHttpResponse | AsyncHttpResponse) -> _Capture:
    extensions = response.extensions
    if extensions.get(CAPTURED_EXTENSION):
        raise httpx.StreamConsumed()

    disposition = Disposition.from_status(response.status_code)

    # server errors surface through the client before the body is read
    if response.is_server_error:
        logger.warning(
            "response.server_error",
            status=response.status_code,
            url=_request_url(response),
        )
        response.raise_for_status()

    extensions[CAPTURED_EXTENSION] = True
    body = yield
    captured: TypedResponse[Any, Any] = TypedResponse(
        body=bytes(body), disposition=disposition
    )
    logger.debug(
        "response.captured",
        status=response.status_code,
        disposition=disposition.value,
        size=len(captured.body),
    )
    return captured


def _finish(steps: _Capture, body: bytes) -> TypedResponse[Any, Any]:
    try:
        steps.send(body)
    except StopIteration as stop:
        return stop.value
    raise RuntimeError("capture routine yielded more than once")


def capture(response: SyncHttpResponse) -> TypedResponse[Any, Any]:
    """Capture ``response``, blocking until its body is read.

    The response is consumed: capturing the same handle again raises
    ``httpx.StreamConsumed``. A 5xx status raises ``httpx.HTTPStatusError``
    before the body is touched; every other status is captured.
    """
    steps = _capture_steps(response)
    next(steps)
    return _finish(steps, response.read())


async def acapture(response: AsyncHttpResponse) -> TypedResponse[Any, Any]:
    """Async counterpart of :func:`capture`; awaits the body read only."""
    steps = _capture_steps(response)
    next(steps)
    return _finish(steps, await response.aread())
