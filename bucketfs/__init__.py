"""bucketfs.

This package treats an S3-compatible object store as a hierarchical
filesystem, without a vendor SDK.

Key features:
1. Signed (SigV4) requests over an injectable async HTTP transport
2. Directory emulation over key prefixes with lazy paginated listings
3. Synchronization of in-memory trees with a bucket
4. Structured error handling across all components
"""

from .core.errors import (
    BaseError,
    ConfigurationError,
    DeleteError,
    DomainError,
    LogicError,
    ProviderError,
    SyncError,
    TransportError,
    UploadError,
)
from .core.models import BucketName, Content, OperationResult, OperationStatus, Path, Region
from .providers import AiohttpTransport, Bucket, BucketSettings, HttpTransport
from .filesystem import Directory, File, FilesystemAdapter, LoadTracker, NodeKind
from .factory import Factory


__version__ = "0.1.0"

__all__ = [
    "BaseError",
    "ConfigurationError",
    "DeleteError",
    "DomainError",
    "LogicError",
    "ProviderError",
    "SyncError",
    "TransportError",
    "UploadError",
    "BucketName",
    "Content",
    "OperationResult",
    "OperationStatus",
    "Path",
    "Region",
    "AiohttpTransport",
    "Bucket",
    "BucketSettings",
    "HttpTransport",
    "Directory",
    "File",
    "FilesystemAdapter",
    "LoadTracker",
    "NodeKind",
    "Factory",
    "__version__",
]
