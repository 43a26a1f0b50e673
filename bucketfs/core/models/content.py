"""File content, either held in memory or loaded on demand."""

import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Loader = Callable[[], Awaitable[Optional[bytes]]]


class Content:
    """Byte content of a file.

    Deferred content calls its loader on every ``read()``; nothing is cached,
    so re-reading re-issues the underlying call. A loader returning None (the
    object vanished since it was listed) reads as empty content.
    """

    __slots__ = ("_data", "_loader")

    def __init__(self, data: Optional[bytes] = None, loader: Optional[Loader] = None):
        if (data is None) == (loader is None):
            raise ValueError("Content needs exactly one of data or loader")
        self._data = data
        self._loader = loader

    @classmethod
    def none(cls) -> 'Content':
        return cls(b"")

    @classmethod
    def of_bytes(cls, data: bytes) -> 'Content':
        return cls(bytes(data))

    @classmethod
    def of_string(cls, text: str, encoding: str = "utf-8") -> 'Content':
        return cls(text.encode(encoding))

    @classmethod
    def deferred(cls, loader: Loader) -> 'Content':
        return cls(loader=loader)

    @property
    def is_deferred(self) -> bool:
        return self._loader is not None

    @property
    def size(self) -> Optional[int]:
        """Size in bytes, None while the content hasn't been loaded."""
        return None if self._data is None else len(self._data)

    async def read(self) -> bytes:
        if self._data is not None:
            return self._data

        data = await self._loader()
        if data is None:
            logger.debug("Deferred content is no longer available, reading it as empty")
            return b""
        return data

    async def text(self, encoding: str = "utf-8") -> str:
        return (await self.read()).decode(encoding)

    def __repr__(self) -> str:
        if self._data is None:
            return "Content(<deferred>)"
        return f"Content({len(self._data)} bytes)"
