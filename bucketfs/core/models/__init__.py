"""Core models for bucketfs.

This package provides the value objects shared by the bucket client and the
filesystem adapter: paths, regions, bucket names and operation outcomes.
"""

from .path import Path
from .content import Content
from .values import Region, BucketName
from .result import OperationResult, OperationStatus

__all__ = [
    "Path",
    "Content",
    "Region",
    "BucketName",
    "OperationResult",
    "OperationStatus",
]
