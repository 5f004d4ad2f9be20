"""Kibana API exceptions."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .response import APIResponse


class KibanaError(Exception):
    """Base exception for the Kibana client."""
    pass


class RequestValidationError(KibanaError, ValueError):
    """Request could not be built (missing request, missing required field)."""
    pass


class SerializationError(KibanaError):
    """Request body could not be encoded."""
    pass


class ResponseDecodeError(KibanaError):
    """A success response body did not match the expected shape."""

    def __init__(self, message: str, response: Optional["APIResponse"] = None):
        super().__init__(message)
        self.response = response


class ResponseReadError(KibanaError):
    """The response body could not be read from the connection.

    ``response`` carries the status code and headers already received.
    """

    def __init__(self, message: str, response: Optional["APIResponse"] = None):
        super().__init__(message)
        self.response = response

    @property
    def status_code(self) -> Optional[int]:
        return self.response.status_code if self.response else None


class APIError(KibanaError):
    """Kibana answered with a non-success status code.

    ``error`` holds the decoded JSON error object when the body was JSON,
    otherwise the raw body text.
    """

    def __init__(
        self,
        status_code: int,
        error: Any = None,
        response: Optional["APIResponse"] = None,
        message: Optional[str] = None,
    ):
        self.status_code = status_code
        self.error = error
        self.response = response
        self.message = message or f"HTTP Status Code {status_code}: {self._render(error)}"
        super().__init__(self.message)

    @property
    def request_id(self) -> Optional[str]:
        return self.response.request_id if self.response else None

    @staticmethod
    def _render(error: Any) -> str:
        if error is None:
            return ""
        if isinstance(error, str):
            return error
        from .serialization import dumps_compact

        return dumps_compact(error)


class BadRequestError(APIError):
    """400"""
    pass


class AuthenticationError(APIError):
    """401/403"""
    pass


class NotFoundError(APIError):
    """404"""
    pass


class ConflictError(APIError):
    """409"""
    pass


class RateLimitError(APIError):
    """429"""
    pass


class ServerError(APIError):
    """5xx"""
    pass


_ERROR_MAP = {
    400: BadRequestError,
    401: AuthenticationError,
    403: AuthenticationError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def error_for_status(
    status_code: int, error: Any = None, response: Optional["APIResponse"] = None
) -> APIError:
    """Build the APIError subclass matching ``status_code``."""
    error_class = _ERROR_MAP.get(status_code)
    if error_class is None:
        error_class = ServerError if status_code >= 500 else APIError
    return error_class(status_code=status_code, error=error, response=response)
