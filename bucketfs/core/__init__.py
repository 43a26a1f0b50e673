"""Core module for bucketfs.

This package provides the building blocks shared by the providers and the
filesystem adapter: value objects, operation results and error handling.
"""

from .models import BucketName, Content, OperationResult, OperationStatus, Path, Region

from .errors import (
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
