"""In-memory tree of files and directories.

Nodes form a tagged union: ``File`` and ``Directory`` both expose a ``kind``
and tree algorithms switch on it. Nodes are immutable; modifying a directory
returns a new one. Every node gets a process-unique ``handle`` at creation,
which the filesystem adapter uses to recognise nodes it has read itself.
"""

import enum
import itertools
from dataclasses import dataclass, field
from typing import AsyncIterator, Callable, FrozenSet, Iterable, Optional, Tuple, Union

from ..core.errors import DomainError, LogicError
from ..core.models import Content

_handles = itertools.count(1)


def _next_handle() -> int:
    return next(_handles)


class NodeKind(str, enum.Enum):
    """Enumeration of tree node kinds."""

    FILE = "file"
    DIRECTORY = "directory"

    def __str__(self) -> str:
        return self.value


def validate_name(name: str) -> str:
    """Validate a node name.

    Raises:
        DomainError: If the name is empty, ``.``, ``..`` or contains ``/``
            or a NUL character
    """
    if (
        not isinstance(name, str)
        or name in ("", ".", "..")
        or "/" in name
        or "\0" in name
    ):
        raise DomainError(str(name), "name")
    return name


@dataclass(frozen=True, eq=False)
class File:
    """A named file.

    Attributes:
        name: File name, a single path segment
        content: File content, possibly deferred
        handle: Process-unique identifier of this instance
    """

    name: str
    content: Content = field(default_factory=Content.none)
    handle: int = field(default_factory=_next_handle, init=False)

    def __post_init__(self):
        validate_name(self.name)

    @classmethod
    def of(cls, name: str, content: Union[Content, bytes, str, None] = None) -> 'File':
        if content is None:
            content = Content.none()
        elif isinstance(content, bytes):
            content = Content.of_bytes(content)
        elif isinstance(content, str):
            content = Content.of_string(content)
        return cls(name, content)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE

    def with_content(self, content: Content) -> 'File':
        return File(self.name, content)


# Called on every iteration, so each traversal re-issues the listing
ChildSource = Callable[[], AsyncIterator['Node']]


@dataclass(frozen=True, eq=False)
class Directory:
    """A named directory.

    Children come from two places: an optional lazy ``source`` (the listing
    of a directory read from the bucket) and the ``added`` nodes. ``removed``
    holds the names removed since the directory was loaded; an added child
    shadows a source child with the same name.

    Attributes:
        name: Directory name, a single path segment
        source: Produces the loaded children, None for in-memory directories
        added: Children added explicitly
        removed: Names removed since the directory was loaded
        handle: Process-unique identifier of this instance
    """

    name: str
    source: Optional[ChildSource] = field(default=None, repr=False)
    added: Tuple['Node', ...] = ()
    removed: FrozenSet[str] = frozenset()
    handle: int = field(default_factory=_next_handle, init=False)

    def __post_init__(self):
        validate_name(self.name)
        names = [child.name for child in self.added]
        if len(names) != len(set(names)):
            raise LogicError(f"Directory '{self.name}' has duplicate children names", path=self.name)

    @classmethod
    def of(cls, name: str, children: Iterable['Node'] = ()) -> 'Directory':
        """Build an in-memory directory, later children replacing earlier
        ones with the same name."""
        directory = cls(name)
        for child in children:
            directory = directory.add(child)
        return directory

    @classmethod
    def lazy(cls, name: str, source: ChildSource) -> 'Directory':
        return cls(name, source=source)

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY

    async def files(self) -> AsyncIterator['Node']:
        """Iterate the current children: loaded ones first, then added ones."""
        shadowed = {child.name for child in self.added} | self.removed
        if self.source is not None:
            async for child in self.source():
                if child.name not in shadowed:
                    yield child

        for child in self.added:
            yield child

    def add(self, node: 'Node') -> 'Directory':
        """Return a copy of this directory containing ``node``."""
        added = tuple(child for child in self.added if child.name != node.name) + (node,)
        return Directory(self.name, self.source, added, self.removed - {node.name})

    def remove(self, name: str) -> 'Directory':
        """Return a copy of this directory without the child ``name``."""
        validate_name(name)
        added = tuple(child for child in self.added if child.name != name)
        return Directory(self.name, self.source, added, self.removed | {name})

    async def get(self, name: str) -> Optional['Node']:
        async for child in self.files():
            if child.name == name:
                return child
        return None

    async def contains(self, name: str) -> bool:
        return await self.get(name) is not None


Node = Union[File, Directory]
