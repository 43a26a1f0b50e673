"""Outcome models for bucket operations.

Uploads and deletes never raise for operational reasons: they return an
``OperationResult`` so callers can branch or retry. Only the filesystem
adapter turns a failed outcome into an exception.
"""

import enum
from datetime import datetime
from typing import Any, Optional, Type

from pydantic import BaseModel, Field, model_validator

from ..errors import ErrorContext, ProviderError


class OperationStatus(str, enum.Enum):
    """Enumeration of possible operation outcomes."""

    SUCCESS = "SUCCESS"
    FAILURE = "FAILURE"

    def __str__(self) -> str:
        return self.value


class OperationResult(BaseModel):
    """Outcome of a single network operation on the bucket.

    Attributes:
        operation: HTTP method that was issued
        path: Bucket relative path the operation targeted
        status: Success or failure
        status_code: HTTP status code, None when no response was received
        error: Description of the failure
        timestamp: When the outcome was produced
    """

    operation: str
    path: str
    status: OperationStatus = OperationStatus.SUCCESS
    status_code: Optional[int] = None
    error: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="before")
    @classmethod
    def set_defaults(cls, values: Any) -> Any:
        """Mark the outcome as failed when an error is present."""
        if isinstance(values, dict) and values.get("error") and "status" not in values:
            values["status"] = OperationStatus.FAILURE
        return values

    @classmethod
    def success(cls, operation: str, path: str, status_code: Optional[int] = None) -> 'OperationResult':
        return cls(operation=operation, path=path, status_code=status_code)

    @classmethod
    def failure(
        cls,
        operation: str,
        path: str,
        error: str,
        status_code: Optional[int] = None
    ) -> 'OperationResult':
        return cls(
            operation=operation,
            path=path,
            status=OperationStatus.FAILURE,
            status_code=status_code,
            error=error,
        )

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    def raise_for_failure(
        self,
        error_type: Type[ProviderError] = ProviderError,
        **kwargs: Any
    ) -> 'OperationResult':
        """Raise ``error_type`` if the operation failed, otherwise return self.

        Args:
            error_type: ProviderError subclass to raise
            **kwargs: Extra constructor arguments for ``error_type``

        Returns:
            This result, for chaining

        Raises:
            ProviderError: If the outcome is a failure
        """
        if self.is_success:
            return self

        raise error_type(
            message=f"Failed to {self.operation.lower()} {self.path} ({self.error})",
            context=ErrorContext.create(
                operation=self.operation,
                status_code=self.status_code,
            ),
            **kwargs
        )
