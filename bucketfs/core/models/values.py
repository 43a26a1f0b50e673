"""Validated value objects: region codes and bucket names."""

import re
from typing import Optional

from ..errors import DomainError

_REGION_PATTERN = re.compile(r"^[a-z0-9\-]+$")
_BUCKET_NAME_PATTERN = re.compile(r"^[a-z0-9.\-]{3,}$")


class Region:
    """Region code such as ``eu-west-1``.

    Instances are only built through ``of`` or ``maybe`` so an invalid region
    never exists.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str, _validated: bool = False):
        if not _validated:
            raise TypeError("Use Region.of() or Region.maybe() to build a region")
        self._value = value

    @classmethod
    def of(cls, value: str) -> 'Region':
        """Build a region.

        Raises:
            DomainError: If ``value`` doesn't match ``^[a-z0-9-]+$``
        """
        region = cls.maybe(value)
        if region is None:
            raise DomainError(value, "region")
        return region

    @classmethod
    def maybe(cls, value: str) -> Optional['Region']:
        """Build a region, returning None for invalid input."""
        if not isinstance(value, str) or not _REGION_PATTERN.fullmatch(value):
            return None
        return cls(value, _validated=True)

    def to_string(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"Region({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Region) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("region", self._value))


class BucketName:
    """Bucket name, at least three of ``a-z``, ``0-9``, ``.`` and ``-``."""

    __slots__ = ("_value",)

    def __init__(self, value: str):
        if not isinstance(value, str) or not _BUCKET_NAME_PATTERN.fullmatch(value):
            raise DomainError(str(value), "bucket name")
        self._value = value

    def to_string(self) -> str:
        return self._value

    def __str__(self) -> str:
        return self._value

    def __repr__(self) -> str:
        return f"BucketName({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, BucketName) and other._value == self._value

    def __hash__(self) -> int:
        return hash(("bucket", self._value))
