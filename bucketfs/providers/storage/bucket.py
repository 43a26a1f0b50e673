"""S3 bucket client speaking the REST protocol directly.

This module provides the ``Bucket`` provider: signed GET/PUT/DELETE requests
on object keys, and directory emulation on top of delimiter listings.

Failures are split in two families:

    - usage errors (directory passed where a file is expected and vice
      versa) raise ``LogicError`` before any request is built
    - operational failures are outcomes: ``get`` returns None, ``upload`` and
      ``delete`` return a failed ``OperationResult``, listings end early
"""

import logging
import os
from datetime import datetime, timezone
from typing import AsyncIterator, Callable, Dict, Mapping, Optional

import pydantic
from pydantic import field_validator

from ...core.errors import ConfigurationError, ErrorContext, LogicError, ProviderError, TransportError
from ...core.models import Content, OperationResult, Path, Region
from ..base import Provider, ProviderSettings
from ..http import AiohttpTransport, HttpRequest, HttpResponse, HttpTransport, TransportSettings
from .listing import ListPaginator
from .location import BucketLocation
from .signer import RequestSigner

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class BucketSettings(ProviderSettings):
    """Settings for a bucket.

    Attributes:
        url: Bucket URL with credentials, bucket name and optional root prefix
        region: Region code used in the signing scope
        strict_reads: Raise on transport and non-404 failures in ``get``
            instead of reporting the object as absent
        keep_empty_directories: Whether filesystem adapters built for this
            bucket upload the empty directory marker
    """

    url: str
    region: str
    strict_reads: bool = False
    keep_empty_directories: bool = True

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v:
            raise ValueError("Bucket url can't be empty")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> 'BucketSettings':
        """Load settings from environment variables.

        Reads ``S3_URL`` and ``S3_REGION`` (required) and optionally
        ``S3_TIMEOUT_SECONDS``, ``S3_STRICT_READS``,
        ``S3_KEEP_EMPTY_DIRECTORIES``.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``
            **overrides: Values taking precedence over the environment

        Raises:
            ConfigurationError: If a required variable is missing or a value
                is invalid
        """
        environ = os.environ if environ is None else environ
        values: Dict[str, object] = {}

        for key, variable in (("url", "S3_URL"), ("region", "S3_REGION")):
            if key in overrides and overrides[key]:
                continue
            if not environ.get(variable):
                raise ConfigurationError(f"Environment variable {variable} is missing", config_key=variable)
            values[key] = environ[variable]

        if environ.get("S3_TIMEOUT_SECONDS"):
            try:
                values["timeout_seconds"] = float(environ["S3_TIMEOUT_SECONDS"])
            except ValueError as e:
                raise ConfigurationError(
                    f"S3_TIMEOUT_SECONDS must be a number, got '{environ['S3_TIMEOUT_SECONDS']}'",
                    config_key="S3_TIMEOUT_SECONDS",
                    cause=e
                )
        if environ.get("S3_STRICT_READS"):
            values["strict_reads"] = _as_bool(environ["S3_STRICT_READS"])
        if environ.get("S3_KEEP_EMPTY_DIRECTORIES"):
            values["keep_empty_directories"] = _as_bool(environ["S3_KEEP_EMPTY_DIRECTORIES"])

        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return cls(**values)
        except pydantic.ValidationError as e:
            raise ConfigurationError(f"Invalid bucket settings: {e}", cause=e)


class Bucket(Provider[BucketSettings]):
    """Client for one bucket (optionally scoped under a root prefix).

    All paths are relative to the bucket root prefix. ``Path.none()`` is the
    root itself.
    """

    def __init__(
        self,
        settings: BucketSettings,
        transport: Optional[HttpTransport] = None,
        clock: Optional[Clock] = None,
        signer: Optional[RequestSigner] = None,
        name: str = "bucket"
    ):
        """Initialize the bucket.

        Args:
            settings: Bucket settings
            transport: HTTP transport, an ``AiohttpTransport`` by default
            clock: Returns the signing timestamp, UTC now by default
            signer: Request signer
            name: Provider name

        Raises:
            DomainError: If the region or the bucket name is invalid
            ConfigurationError: If the URL is unusable
        """
        super().__init__(name=name, settings=settings, provider_type="storage")
        self.location = BucketLocation.parse(self.settings.url)
        self.region = Region.of(self.settings.region)
        self._transport = transport or AiohttpTransport(
            name=f"{name}-http",
            settings=TransportSettings(
                timeout_seconds=self.settings.timeout_seconds,
                log_requests=self.settings.log_requests,
                log_responses=self.settings.log_responses,
            ),
        )
        self._clock = clock or utc_now
        self._signer = signer or RequestSigner()
        self._paginator = ListPaginator(self._fetch_page)

    @property
    def transport(self) -> HttpTransport:
        return self._transport

    async def _initialize(self) -> None:
        await self._transport.initialize()

    async def _shutdown(self) -> None:
        await self._transport.shutdown()

    def __repr__(self) -> str:
        return f"<Bucket {self.location.bucket} root={str(self.location.root)!r}>"

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def build_request(self, method: str, url: str, body: Optional[bytes] = None) -> HttpRequest:
        """Build a signed request."""
        headers = self._signer.sign(
            method,
            url,
            self.region,
            self.location.access_key,
            self.location.secret_key,
            body,
            self._clock(),
        )
        if body is not None:
            headers["Content-Length"] = str(len(body))

        return HttpRequest(method=method, url=url, headers=headers, body=body)

    async def _send(self, request: HttpRequest) -> HttpResponse:
        await self.initialize()

        response = await self._transport.send(request)
        if self.settings.log_requests:
            logger.debug(f"{request.method} {request.url} -> {response.status_code}")
        return response

    async def _fetch_page(self, query: Dict[str, str]) -> Optional[bytes]:
        request = self.build_request("GET", self.location.listing_url(query))
        try:
            response = await self._send(request)
        except TransportError as e:
            if self.settings.strict_reads:
                raise
            logger.warning(f"Failed to retrieve path list: {str(e)}")
            return None

        if not response.is_success:
            if self.settings.strict_reads:
                raise ProviderError(
                    message=f"Failed to retrieve path list (status {response.status_code})",
                    provider_name=self.name,
                    context=ErrorContext.create(query=query, status_code=response.status_code),
                )
            logger.warning(f"Failed to retrieve path list (status {response.status_code})")
            return None

        return response.body

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def get(self, path: Path) -> Optional[Content]:
        """Fetch the content of a file.

        Args:
            path: File path

        Returns:
            The content, None if the object can't be fetched

        Raises:
            LogicError: If ``path`` is a directory
            TransportError: Only with ``strict_reads``, when no response came
            ProviderError: Only with ``strict_reads``, on non-404 failures
        """
        if path.directory:
            raise LogicError(f"A directory can't be retrieved, got '{path}'", path=str(path))

        request = self.build_request("GET", self.location.object_url(path))
        try:
            response = await self._send(request)
        except TransportError as e:
            if self.settings.strict_reads:
                raise
            logger.warning(f"Failed to get {path}: {str(e)}")
            return None

        if response.is_success:
            return Content.of_bytes(response.body)

        if self.settings.strict_reads and response.status_code != 404:
            raise ProviderError(
                message=f"Failed to get {path} (status {response.status_code})",
                provider_name=self.name,
                context=ErrorContext.create(path=str(path), status_code=response.status_code),
            )
        return None

    async def upload(self, path: Path, content: Content) -> OperationResult:
        """Upload ``content`` at ``path``.

        Returns:
            Success, or failure when the store rejected the request or no
            response was received

        Raises:
            LogicError: If ``path`` is a directory
        """
        if path.directory:
            raise LogicError(f"A directory can't be uploaded, got '{path}'", path=str(path))

        body = await content.read()
        request = self.build_request("PUT", self.location.object_url(path), body)
        return await self._outcome("PUT", path, request)

    async def delete(self, path: Path) -> OperationResult:
        """Delete the object at ``path``.

        Directory paths are accepted: they address the folder placeholder
        key, not the objects under it.

        Raises:
            LogicError: If ``path`` is the bucket root
        """
        if path.is_none:
            raise LogicError("The bucket root can't be deleted", path="")

        request = self.build_request("DELETE", self.location.object_url(path))
        return await self._outcome("DELETE", path, request)

    async def _outcome(self, operation: str, path: Path, request: HttpRequest) -> OperationResult:
        try:
            response = await self._send(request)
        except TransportError as e:
            logger.warning(f"{operation} {path} failed: {str(e)}")
            return OperationResult.failure(operation, str(path), type(e).__name__)

        if not response.is_success:
            logger.warning(f"{operation} {path} failed with status {response.status_code}")
            return OperationResult.failure(
                operation,
                str(path),
                f"status {response.status_code}",
                status_code=response.status_code,
            )

        return OperationResult.success(operation, str(path), response.status_code)

    async def contains(self, path: Path) -> bool:
        """Check whether a file or a directory exists.

        A directory exists as soon as its listing yields anything, its own
        placeholder key included.
        """
        if path.directory:
            async for _ in self._paginator.entries(self.location.object_key(path)):
                return True
            return False

        return await self.get(path) is not None

    def list(self, path: Path) -> AsyncIterator[Path]:
        """List the direct children of a directory.

        The returned iterator is lazy: no request is made until iteration
        starts, and further pages are only requested as they are consumed.

        Args:
            path: Directory path, ``Path.none()`` for the root

        Returns:
            Child paths relative to ``path``, directories with their trailing
            separator

        Raises:
            LogicError: Immediately, if ``path`` isn't a directory
        """
        if not path.directory:
            raise LogicError(f"Only a directory can be listed, got '{path}'", path=str(path))

        return self._list(self.location.object_key(path))

    async def _list(self, prefix: str) -> AsyncIterator[Path]:
        async for found in self._paginator.entries(prefix):
            if found == "":
                # the folder's own placeholder key
                continue
            try:
                yield Path.of(found)
            except LogicError:
                logger.warning(f"Skipping key '{prefix}{found}' that can't be represented as a path")
