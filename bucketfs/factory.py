"""Factory for creating bucket clients.

This module wires settings, the default HTTP transport and the clock into a
``Bucket``, either from explicit arguments or from the environment.
"""

import logging
from typing import Mapping, Optional, Union

from .core.errors import BaseError, ErrorContext, ProviderError
from .core.models import Region
from .providers.http import HttpTransport
from .providers.storage import Bucket, BucketSettings
from .providers.storage.bucket import Clock

logger = logging.getLogger(__name__)


class Factory:
    """Builds ``Bucket`` instances sharing one transport and clock.

    Args:
        transport: Optional transport handed to every bucket; each bucket
            creates its own ``AiohttpTransport`` when omitted
        clock: Optional clock used for signing timestamps
    """

    def __init__(self, transport: Optional[HttpTransport] = None, clock: Optional[Clock] = None):
        self._transport = transport
        self._clock = clock

    def build(
        self,
        url: str,
        region: Union[Region, str],
        name: str = "bucket",
        **settings
    ) -> Bucket:
        """Create a bucket client.

        Args:
            url: Bucket URL carrying credentials, bucket name and root prefix
            region: Region of the bucket
            name: Provider name
            **settings: Additional ``BucketSettings`` fields

        Returns:
            Bucket, not yet initialized

        Raises:
            DomainError: If the region or the bucket name is invalid
            ConfigurationError: If the URL is unusable
        """
        return self.create(BucketSettings(url=url, region=str(region), **settings), name=name)

    def from_env(self, environ: Optional[Mapping[str, str]] = None, name: str = "bucket", **overrides) -> Bucket:
        """Create a bucket client configured by ``S3_*`` environment variables.

        Raises:
            ConfigurationError: If ``S3_URL`` or ``S3_REGION`` is missing
        """
        return self.create(BucketSettings.from_env(environ, **overrides), name=name)

    def create(self, settings: BucketSettings, name: str = "bucket") -> Bucket:
        try:
            bucket = Bucket(
                settings,
                transport=self._transport,
                clock=self._clock,
                name=name,
            )
        except BaseError:
            raise
        except Exception as e:
            raise ProviderError(
                message=f"Failed to create bucket '{name}': {str(e)}",
                provider_name=name,
                context=ErrorContext.create(provider_type="storage"),
                cause=e
            ) from e

        logger.debug(f"Created {bucket!r}")
        return bucket
