"""Provider package.

This package contains the providers bucketfs talks to, organized by type:
- HTTP transports (http): send signed requests and return raw responses
- Storage providers (storage): the S3 bucket client
"""

from .base import Provider, ProviderSettings
from .http import AiohttpTransport, HttpRequest, HttpResponse, HttpTransport, TransportSettings
from .storage import Bucket, BucketSettings

__all__ = [
    "Provider",
    "ProviderSettings",
    "AiohttpTransport",
    "HttpRequest",
    "HttpResponse",
    "HttpTransport",
    "TransportSettings",
    "Bucket",
    "BucketSettings",
]
