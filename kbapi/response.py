from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar

import httpx

from .serialization import loads

T = TypeVar("T")


@dataclass
class APIResponse(Generic[T]):
    """Typed result of one Kibana call.

    ``body`` is the decoded success payload, ``error`` the decoded (or raw
    text) error payload. ``stream`` is only set for streamed exports and must
    be closed by the caller.
    """
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[T] = None
    error: Any = None
    raw_body: bytes = b""
    elapsed_ms: float = 0.0
    request_id: Optional[str] = None
    stream: Optional[httpx.Response] = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def json(self) -> Any:
        return loads(self.raw_body)

    def text(self) -> str:
        return self.raw_body.decode("utf-8")
