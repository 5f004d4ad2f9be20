"""Kibana REST API client."""
from .client import Client, XSRFTransport
from .transport import HTTPTransport, Measurable
from .version import VERSION

__version__ = VERSION

__all__ = ["Client", "HTTPTransport", "Measurable", "XSRFTransport", "VERSION", "__version__"]
