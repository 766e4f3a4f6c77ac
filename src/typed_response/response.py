"""Captured HTTP response with deferred, disposition-aware decoding."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import msgspec

from .logging import get_logger
from .result import Err, Ok, Result

if TYPE_CHECKING:
    from .protocols import AsyncHttpResponse, SyncHttpResponse

logger = get_logger(__name__)

T = TypeVar("T")
E = TypeVar("E")

__all__ = ["Disposition", "TypedResponse"]


class Disposition(enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def from_status(cls, status_code: int) -> Disposition:
        if 200 <= status_code < 300:
            return cls.SUCCESS
        return cls.FAILURE


@functools.lru_cache(maxsize=256)
def _cached_decoder(type_: Any) -> msgspec.json.Decoder:
    return msgspec.json.Decoder(type_)


def _decoder(type_: Any) -> msgspec.json.Decoder:
    try:
        return _cached_decoder(type_)
    except TypeError:
        # unhashable type spec
        return msgspec.json.Decoder(type_)


_ANY_DECODER = msgspec.json.Decoder()


@dataclass(frozen=True, slots=True)
class TypedResponse(Generic[T, E]):
    """Raw response body plus the success/failure disposition of its status.

    ``T`` and ``E`` name the shapes the caller expects on success and on
    failure. They are type parameters only: nothing about them is stored, and
    the concrete types are supplied again to :meth:`into_result`.
    """

    body: bytes
    disposition: Disposition

    @classmethod
    def from_status(cls, status_code: int, body: bytes) -> TypedResponse[T, E]:
        return cls(body=bytes(body), disposition=Disposition.from_status(status_code))

    @classmethod
    def try_from_response(cls, response: SyncHttpResponse) -> TypedResponse[T, E]:
        """Capture ``response``, reading its body on the calling thread."""
        from .capture import capture

        return capture(response)

    @classmethod
    async def atry_from_response(
        cls, response: AsyncHttpResponse
    ) -> TypedResponse[T, E]:
        """Capture ``response``, awaiting its body."""
        from .capture import acapture

        return await acapture(response)

    @property
    def is_success(self) -> bool:
        return self.disposition is Disposition.SUCCESS

    @property
    def is_failure(self) -> bool:
        return self.disposition is Disposition.FAILURE

    def bytes(self) -> bytes:
        return self.body

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def into_json(self, *, error_key: str = "error") -> Result[Any, Any]:
        """Parse the body as generic JSON, routed by disposition.

        Never raises. A body that is not valid JSON becomes
        ``{error_key: "<decode error message>"}`` in the same channel.
        """
        try:
            value = _ANY_DECODER.decode(self.body)
        except msgspec.DecodeError as exc:
            logger.debug(
                "response.json_fallback",
                disposition=self.disposition.value,
                error=str(exc),
            )
            value = {error_key: str(exc)}
        if self.is_success:
            return Ok(value)
        return Err(value)

    def into_result(self, ok_type: type[T], err_type: type[E]) -> Result[T, E]:
        """Decode the body into ``ok_type`` or ``err_type`` by disposition.

        On success a body that does not fit ``ok_type`` raises
        ``msgspec.DecodeError`` (``msgspec.ValidationError`` for shape
        mismatches). On failure the decode error is handed to
        ``err_type.from_decode_error`` and returned as ``Err``.
        """
        from_decode_error = getattr(err_type, "from_decode_error", None)
        if not callable(from_decode_error):
            raise TypeError(
                f"{getattr(err_type, '__name__', err_type)!s} must define "
                "a from_decode_error(exc) classmethod"
            )

        if self.is_success:
            return Ok(_decoder(ok_type).decode(self.body))

        try:
            return Err(_decoder(err_type).decode(self.body))
        except msgspec.DecodeError as exc:
            logger.debug(
                "response.decode_failed",
                disposition=self.disposition.value,
                target=getattr(err_type, "__name__", repr(err_type)),
                error=str(exc),
            )
            return Err(from_decode_error(exc))
