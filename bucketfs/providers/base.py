"""Provider base implementation with configuration and lifecycle management.

Both the HTTP transports and the bucket client are providers: they are
configured through a pydantic settings model, initialized once (lazily or via
``async with``) and shut down explicitly.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, field_validator

from ..core.errors import ProviderError, ErrorContext

logger = logging.getLogger(__name__)


class ProviderSettings(BaseModel):
    """Base settings for providers.

    This class provides:
    1. Timeout configuration handed to the transport
    2. Request/response logging switches
    """

    timeout_seconds: Optional[float] = 60.0

    log_requests: bool = False
    log_responses: bool = False

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: Optional[float]) -> Optional[float]:
        """Validate timeout."""
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v


T = TypeVar('T', bound=ProviderSettings)


class Provider(ABC, Generic[T]):
    """Base class for all providers.

    This class provides:
    1. Consistent initialization and cleanup pattern
    2. Configuration via settings models
    3. Async context manager support
    """

    def __init__(
        self,
        name: str,
        settings: Optional[Union[T, Dict[str, Any]]] = None,
        provider_type: Optional[str] = None
    ):
        """Initialize provider.

        Args:
            name: Provider name, used in logs and error context
            settings: Settings model or a dict parsed into one
            provider_type: Optional provider type for categorization

        Raises:
            TypeError: If the subclass doesn't declare its settings type
        """
        self.name = name
        self.provider_type = provider_type or self.__class__.__name__
        self._initialized = False
        self._setup_lock = asyncio.Lock()

        settings_type = self._settings_type()
        if settings is None:
            self.settings = settings_type()
        elif isinstance(settings, dict):
            self.settings = settings_type(**settings)
        elif isinstance(settings, settings_type):
            self.settings = settings
        else:
            raise TypeError(
                f"Invalid settings type provided. Expected dict or {settings_type.__name__}, "
                f"got {type(settings).__name__}"
            )

        logger.debug(f"Created provider: {name} ({self.provider_type})")

    @classmethod
    def _settings_type(cls) -> type:
        for klass in cls.__mro__:
            for base in getattr(klass, "__orig_bases__", ()):
                args = getattr(base, "__args__", ())
                if args and isinstance(args[0], type) and issubclass(args[0], ProviderSettings):
                    return args[0]
        raise TypeError(
            f"Provider class {cls.__name__} must specify settings type as a generic parameter. "
            f"Example: class MyProvider(Provider[MySettings]): ..."
        )

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Initialize the provider.

        This method:
        1. Ensures the provider is only initialized once
        2. Serializes concurrent initialization with a lock
        3. Wraps unexpected failures in a ProviderError

        Raises:
            ProviderError: If initialization fails
        """
        if self._initialized:
            return

        async with self._setup_lock:
            if self._initialized:
                return

            try:
                await self._initialize()
            except ProviderError:
                raise
            except Exception as e:
                logger.error(f"Failed to initialize provider '{self.name}': {str(e)}")
                raise ProviderError(
                    message=f"Failed to initialize provider: {str(e)}",
                    provider_name=self.name,
                    context=ErrorContext.create(provider_type=self.provider_type),
                    cause=e
                ) from e

            self._initialized = True
            logger.info(f"Provider '{self.name}' initialized successfully")

    async def shutdown(self) -> None:
        """Close provider resources.

        Only attempts shutdown if previously initialized.
        """
        if not self._initialized:
            return

        await self._shutdown()
        self._initialized = False
        logger.info(f"Provider '{self.name}' shut down successfully")

    @abstractmethod
    async def _initialize(self) -> None:
        """Concrete initialization logic implemented by subclasses."""

    async def _shutdown(self) -> None:
        """Concrete shutdown logic implemented by subclasses.

        Default implementation does nothing.
        """

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.shutdown()
