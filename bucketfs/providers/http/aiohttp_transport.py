"""aiohttp based HTTP transport."""

import asyncio
import logging
from typing import Dict, Optional, Union

import aiohttp
from yarl import URL

from ...core.errors import TransportError, ErrorContext
from .base import HttpRequest, HttpResponse, HttpTransport, TransportSettings

logger = logging.getLogger(__name__)


class AiohttpTransport(HttpTransport):
    """HTTP transport backed by an ``aiohttp.ClientSession``.

    The session is created on initialization and closed on shutdown. URLs are
    sent exactly as built by the caller (``encoded=True``) so the path that
    was signed is the path that goes on the wire.
    """

    def __init__(
        self,
        name: str = "aiohttp",
        settings: Optional[Union[TransportSettings, Dict]] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """Initialize the transport.

        Args:
            name: Provider name
            settings: Transport settings
            session: Optional externally owned session, not closed on shutdown
        """
        super().__init__(name=name, settings=settings, provider_type="http")
        self._session = session
        self._owns_session = session is None

    async def _initialize(self) -> None:
        if self._session is None:
            timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True

    async def _shutdown(self) -> None:
        if self._session is not None and self._owns_session:
            await self._session.close()
            self._session = None

    async def send(self, request: HttpRequest) -> HttpResponse:
        await self.initialize()

        if self.settings.log_requests:
            logger.debug(f"{request.method} {request.url}")

        try:
            async with self._session.request(
                request.method,
                URL(request.url, encoded=True),
                headers=request.headers,
                data=request.body,
            ) as response:
                body = await response.read()
                result = HttpResponse(
                    status_code=response.status,
                    headers={key: value for key, value in response.headers.items()},
                    body=body,
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(
                message=f"{request.method} {request.url} failed: {str(e) or type(e).__name__}",
                provider_name=self.name,
                context=ErrorContext.create(method=request.method, url=request.url),
                cause=e
            ) from e

        if self.settings.log_responses:
            logger.debug(f"{request.method} {request.url} -> {result.status_code}")

        return result
