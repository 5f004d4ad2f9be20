"""Transport abstraction and per-request options."""
from __future__ import annotations

from typing import Callable, Iterable, Mapping, Protocol, Tuple, Union, runtime_checkable

import httpx


@runtime_checkable
class Transport(Protocol):
    """Anything able to send an ``httpx.Request`` and return the response.

    Requests carry a relative URL (path and query only); the transport owns
    the base URL, authentication and connection handling.
    """

    async def perform(self, request: httpx.Request) -> httpx.Response:
        ...


# An option mutates the outgoing request; raising aborts the call.
RequestOption = Callable[[httpx.Request], None]

HeaderItems = Union[Mapping[str, Union[str, Iterable[str]]], Iterable[Tuple[str, str]]]


def with_headers(headers: HeaderItems) -> RequestOption:
    """Add headers to the request. Existing values are kept, new ones appended."""
    items: list[Tuple[str, str]] = []
    if isinstance(headers, Mapping):
        for name, value in headers.items():
            if isinstance(value, str):
                items.append((name, value))
            else:
                items.extend((name, v) for v in value)
    else:
        items.extend(headers)

    def apply(request: httpx.Request) -> None:
        request.headers = httpx.Headers([*request.headers.multi_items(), *items])

    return apply


def with_header(name: str, value: str) -> RequestOption:
    return with_headers({name: value})
