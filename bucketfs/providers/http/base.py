"""HTTP transport interface.

The bucket never talks to the network itself: it builds signed
``HttpRequest`` objects and hands them to an injected ``HttpTransport``.
Timeouts, pooling and TLS belong to the transport.
"""

from abc import abstractmethod
from typing import Dict, Optional

from pydantic import BaseModel, Field

from ..base import Provider, ProviderSettings


class HttpRequest(BaseModel):
    """A fully built request, ready to be sent as is.

    Attributes:
        method: HTTP method (``GET``, ``PUT``, ``DELETE``)
        url: Absolute URL whose path and query are already percent-encoded
        headers: Request headers
        body: Optional request body
    """

    method: str
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[bytes] = None


class HttpResponse(BaseModel):
    """A received response with its body fully read."""

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300


class TransportSettings(ProviderSettings):
    """Settings for HTTP transports."""


class HttpTransport(Provider[TransportSettings]):
    """Executes HTTP requests.

    Implementations raise ``TransportError`` when no response could be
    obtained (connection refused, timeout, ...). Any received response, 2xx or
    not, is returned.
    """

    @abstractmethod
    async def send(self, request: HttpRequest) -> HttpResponse:
        """Send a request and return the response.

        Args:
            request: Request to send

        Returns:
            Received response

        Raises:
            TransportError: If no response could be obtained
        """
