from collections.abc import Callable, Iterator

import httpx
import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_response() -> Callable[..., httpx.Response]:
    def _factory(
        status_code: int, content: bytes = b"", **kwargs: object
    ) -> httpx.Response:
        request = httpx.Request("GET", "https://api.example.com/items")
        return httpx.Response(
            status_code, content=content, request=request, **kwargs
        )

    return _factory
