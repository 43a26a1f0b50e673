"""Error handling for bucketfs.

This package provides structured error types and error context shared by the
bucket client and the filesystem adapter.
"""

from .base import (
    BaseError,
    ErrorContext,
    LogicError,
    ValidationError,
    DomainError,
    ConfigurationError,
    ProviderError,
    TransportError,
    SyncError,
    UploadError,
    DeleteError,
)

__all__ = [
    "BaseError",
    "ErrorContext",
    "LogicError",
    "ValidationError",
    "DomainError",
    "ConfigurationError",
    "ProviderError",
    "TransportError",
    "SyncError",
    "UploadError",
    "DeleteError",
]
