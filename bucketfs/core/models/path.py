"""Bucket relative paths.

A path is an ordered tuple of raw (not percent-encoded) segments plus a flag
telling whether it designates a directory. The textual form follows the usual
convention of a trailing separator for directories:

    Path.of("a/b")   -> file "b" inside directory "a"
    Path.of("a/b/")  -> directory "b" inside directory "a"
    Path.none()      -> the bucket root, itself a directory
"""

from dataclasses import dataclass
from typing import Tuple

from ..errors import LogicError

SEPARATOR = "/"


@dataclass(frozen=True)
class Path:
    """Immutable relative path inside a bucket."""

    segments: Tuple[str, ...] = ()
    directory: bool = True

    def __post_init__(self):
        if not self.segments and not self.directory:
            raise LogicError("An empty path can only represent the root directory", path="")
        for segment in self.segments:
            if segment == "":
                raise LogicError(
                    f"Path segments can't be empty, got {self.segments!r}",
                    path=SEPARATOR.join(self.segments),
                )

    @classmethod
    def of(cls, value: str) -> 'Path':
        """Parse a relative path string.

        Args:
            value: Path such as ``"a/b.txt"`` or ``"a/b/"``

        Returns:
            Parsed path

        Raises:
            LogicError: If the path is absolute or contains empty segments
        """
        if value in ("", "./"):
            return cls.none()
        if value.startswith(SEPARATOR):
            raise LogicError(f"Path must be relative, got '{value}'", path=value)

        directory = value.endswith(SEPARATOR)
        body = value[:-1] if directory else value
        segments = tuple(body.split(SEPARATOR))
        if "" in segments:
            raise LogicError(f"Path can't contain empty segments, got '{value}'", path=value)

        return cls(segments, directory)

    @classmethod
    def none(cls) -> 'Path':
        """Return the bucket root."""
        return cls((), True)

    @classmethod
    def from_segments(cls, *segments: str, directory: bool = False) -> 'Path':
        """Build a path from raw segments, which may themselves contain ``/``."""
        return cls(tuple(segments), directory)

    @property
    def is_none(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str:
        """Last segment, empty for the root."""
        return self.segments[-1] if self.segments else ""

    def resolve(self, other: 'Path') -> 'Path':
        """Resolve ``other`` against this path, the way URLs are resolved.

        A directory base keeps all its segments, a file base drops its last
        segment before appending ``other``.
        """
        if self.is_none:
            return other
        base = self.segments if self.directory else self.segments[:-1]
        return Path(base + other.segments, other.directory)

    def as_directory(self) -> 'Path':
        return Path(self.segments, True)

    def as_file(self) -> 'Path':
        if self.is_none:
            raise LogicError("The root directory can't be used as a file", path="")
        return Path(self.segments, False)

    def to_string(self) -> str:
        if self.is_none:
            return ""
        text = SEPARATOR.join(self.segments)
        return text + SEPARATOR if self.directory else text

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Path({self.to_string()!r})"
