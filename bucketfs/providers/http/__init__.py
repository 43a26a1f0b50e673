"""HTTP transports used by the bucket client."""

from .base import HttpRequest, HttpResponse, HttpTransport, TransportSettings
from .aiohttp_transport import AiohttpTransport

__all__ = [
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "TransportSettings",
    "AiohttpTransport",
]
