"""Base error classes with structured error context.

This module provides the foundation for the error handling system. Errors
fall in two families:

    - usage errors (``LogicError``, ``DomainError``): the caller broke a
      precondition, they are raised before any network call is made
    - operational errors (``ProviderError`` and subclasses): the store or the
      transport failed, the bucket reports these as outcomes and only the
      filesystem adapter upgrades them to exceptions
"""

import traceback
from datetime import datetime
from typing import Any, Dict, Optional


class ErrorContext:
    """Structured error context.

    This class provides:
    1. Structured context information for errors
    2. Clean serialization for logging and reporting
    3. Immutable context with builder pattern
    """

    def __init__(self, context_data: Optional[Dict[str, Any]] = None):
        """Initialize error context.

        Args:
            context_data: Optional initial context data
        """
        self._data = context_data or {}
        self._timestamp = datetime.now()

    @classmethod
    def create(cls, **kwargs) -> 'ErrorContext':
        """Create a new error context with the given data."""
        return cls(kwargs)

    def add(self, **kwargs) -> 'ErrorContext':
        """Create a new context with additional data.

        Args:
            **kwargs: Additional context data

        Returns:
            New ErrorContext instance with combined data
        """
        new_data = dict(self._data)
        new_data.update(kwargs)
        return ErrorContext(new_data)

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    @property
    def data(self) -> Dict[str, Any]:
        """Get a copy of the context data dictionary."""
        return dict(self._data)

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    def __str__(self) -> str:
        return f"ErrorContext({self._data})"


class BaseError(Exception):
    """Base class for all bucketfs errors.

    This class provides:
    1. Structured error information with context
    2. Clean serialization for logging and reporting
    3. Cause tracking for nested errors
    """

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize error.

        Args:
            message: Error message
            context: Optional error context
            cause: Optional cause exception
        """
        self.message = message
        self.context = context or ErrorContext()
        self.cause = cause
        self.timestamp = datetime.now()
        self.traceback = traceback.format_exc()

        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary.

        Returns:
            Dictionary representation of error
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.data,
            "cause": str(self.cause) if self.cause else None,
            "traceback": self.traceback
        }

    def __str__(self) -> str:
        cause_str = f" (caused by: {self.cause})" if self.cause else ""
        return f"{self.__class__.__name__}: {self.message}{cause_str}"


class LogicError(BaseError):
    """Error raised when a caller violates a path precondition.

    Reading a directory as a file, listing a file, passing an absolute path:
    these are programming mistakes, never retried.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        if context and path is not None:
            context = context.add(path=path)
        elif path is not None:
            context = ErrorContext.create(path=path)

        super().__init__(message, context, cause)
        self.path = path


class ValidationError(BaseError):
    """Error raised when a value fails validation."""


class DomainError(ValidationError):
    """Error raised when a value object rejects its input.

    Used by the region, bucket name and node name factories.
    """

    def __init__(
        self,
        value: str,
        kind: str,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        self.value = value
        self.kind = kind
        context = (context or ErrorContext()).add(kind=kind, value=value)
        super().__init__(f"Invalid {kind} '{value}'", context, cause)


class ConfigurationError(BaseError):
    """Error raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize configuration error.

        Args:
            message: Error message
            config_key: Optional configuration key
            context: Optional error context
            cause: Optional cause exception
        """
        if context and config_key:
            context = context.add(config_key=config_key)
        elif config_key:
            context = ErrorContext.create(config_key=config_key)

        super().__init__(message, context, cause)


class ProviderError(BaseError):
    """Error raised when provider operations fail.

    This class provides:
    1. Structured provider error information
    2. Clean access to provider context
    """

    def __init__(
        self,
        message: str,
        provider_name: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize provider error.

        Args:
            message: Error message
            provider_name: Optional provider name
            context: Optional error context
            cause: Optional cause exception
        """
        if context and provider_name:
            context = context.add(provider_name=provider_name)
        elif provider_name:
            context = ErrorContext.create(provider_name=provider_name)

        super().__init__(message, context, cause)


class TransportError(ProviderError):
    """Error raised by an HTTP transport when no response could be obtained."""


class SyncError(ProviderError):
    """Error raised when the filesystem adapter cannot persist a change.

    Carries the bucket relative path of the failed operation.
    """

    def __init__(
        self,
        message: str,
        path: str,
        provider_name: Optional[str] = None,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None
    ):
        context = (context or ErrorContext()).add(path=path)
        super().__init__(message, provider_name, context, cause)
        self.path = path


class UploadError(SyncError):
    """Error raised when an upload needed by a synchronization failed."""


class DeleteError(SyncError):
    """Error raised when a delete needed by a synchronization failed."""
