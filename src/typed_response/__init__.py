"""Keep an HTTP response body and its success/failure disposition, decode later.

``TypedResponse`` holds the raw body of an ``httpx`` response together with
whether its status was a success. The body can be read as bytes or text, or
decoded into generic JSON or caller-chosen success/failure types, with the
``Ok``/``Err`` channel picked by the original status.
"""

from __future__ import annotations

from .capture import acapture, capture
from .config import ConfigError, Settings, configure, load_settings
from .ext import AsyncResponseExt, ResponseExt
from .protocols import AsyncHttpResponse, FromDecodeError, SyncHttpResponse
from .response import Disposition, TypedResponse
from .result import Err, Ok, Result, UnwrapError

__version__ = "0.1.0"

__all__ = [
    "AsyncHttpResponse",
    "AsyncResponseExt",
    "ConfigError",
    "Disposition",
    "Err",
    "FromDecodeError",
    "Ok",
    "ResponseExt",
    "Result",
    "Settings",
    "SyncHttpResponse",
    "TypedResponse",
    "UnwrapError",
    "acapture",
    "capture",
    "configure",
    "load_settings",
]
