from __future__ import annotations

import contextlib
import errno
import logging
import re
import sys
from typing import Any

import structlog

BEARER_RE = re.compile(r"(?i)\bbearer\s+[A-Za-z0-9._~+/=-]+")
SECRET_QUERY_RE = re.compile(
    r"(?i)\b(token|access_token|api_key|apikey|key)=([^&\s\"']+)"
)


def _redact(text: str) -> str:
    redacted = BEARER_RE.sub("Bearer [REDACTED]", text)
    return SECRET_QUERY_RE.sub(r"\1=[REDACTED]", redacted)


def _is_broken_pipe(exc: BaseException | None) -> bool:
    if isinstance(exc, BrokenPipeError):
        return True
    return isinstance(exc, OSError) and exc.errno == errno.EPIPE


def redact_secrets_processor(_, __, event_dict):
    """Processor to redact credentials from the event and its url field."""
    message = str(event_dict.get("event", ""))
    redacted = _redact(message)
    if redacted != message:
        event_dict["event"] = redacted

    url = event_dict.get("url")
    if isinstance(url, str):
        event_dict["url"] = _redact(url)

    return event_dict


class SafeStreamHandler(logging.StreamHandler):
    """Stream handler that goes quiet once its reader has hung up."""

    pipe_closed = False

    def emit(self, record: logging.LogRecord) -> None:
        if self.pipe_closed:
            return
        super().emit(record)

    def handleError(self, record: logging.LogRecord) -> None:
        if not _is_broken_pipe(sys.exc_info()[1]):
            super().handleError(record)
            return
        self.pipe_closed = True
        with contextlib.suppress(OSError, ValueError):
            self.stream.close()


def get_logger(name: str | None = None) -> Any:
    return structlog.get_logger(name)


def setup_logging(*, debug: bool = False) -> None:
    """Configure structlog with console output and credential redaction."""

    structlog.configure(
        processors=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            redact_secrets_processor,
            structlog.dev.ConsoleRenderer(colors=True)
            if debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = SafeStreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[handler],
        force=True,
    )

    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
