"""Typed async bindings for the Kibana REST API."""
from .api import API, new
from .base import BaseAPI, below_299, only_200
from .exceptions import (
    APIError,
    AuthenticationError,
    BadRequestError,
    ConflictError,
    KibanaError,
    NotFoundError,
    RateLimitError,
    RequestValidationError,
    ResponseDecodeError,
    ResponseReadError,
    SerializationError,
    ServerError,
)
from .instrumentation import Instrumentation, Instrumented, LoggingInstrumentation, OpenTelemetryInstrumentation
from .ndjson import NDJSONResponse
from .response import APIResponse
from .transport import RequestOption, Transport, with_header, with_headers

__all__ = [
    "API",
    "APIError",
    "APIResponse",
    "AuthenticationError",
    "BadRequestError",
    "BaseAPI",
    "ConflictError",
    "Instrumentation",
    "Instrumented",
    "KibanaError",
    "LoggingInstrumentation",
    "NDJSONResponse",
    "NotFoundError",
    "OpenTelemetryInstrumentation",
    "RateLimitError",
    "RequestOption",
    "RequestValidationError",
    "ResponseDecodeError",
    "ResponseReadError",
    "SerializationError",
    "ServerError",
    "Transport",
    "below_299",
    "new",
    "only_200",
    "with_header",
    "with_headers",
]
