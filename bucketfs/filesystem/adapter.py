"""Filesystem adapter over a bucket.

This module presents a bucket as a tree of files and directories. Writing a
node synchronizes the bucket with it:

    - a file replaces whatever lives at its path, directories included
    - a directory replaces a same-named file, uploads its children and
      deletes the children removed since it was loaded

Empty directories don't exist in a key space, so each synchronized directory
also receives an empty marker file that listings hide.
"""

import logging
from typing import AsyncIterator, Optional, Set

from ..core.errors import DeleteError, DomainError, UploadError
from ..core.models import Content, Path
from ..providers.storage import Bucket
from .models import ChildSource, Directory, File, Node, NodeKind, validate_name
from .tracking import LoadTracker

logger = logging.getLogger(__name__)

VOID_FILE = ".keep-empty-directory"


class FilesystemAdapter:
    """Tree view of a bucket.

    This class provides:
    1. Lazy reads: listings run on iteration, contents on first read
    2. Recursive synchronization of files and directories
    3. Skipping of nodes written back unchanged to where they were read
    """

    def __init__(
        self,
        bucket: Bucket,
        keep_empty_directories: bool = True,
        tracker: Optional[LoadTracker] = None
    ):
        self._bucket = bucket
        self._keep_empty_directories = keep_empty_directories
        self._tracker = tracker or LoadTracker()

    @classmethod
    def of(cls, bucket: Bucket) -> 'FilesystemAdapter':
        """Create an adapter honouring the bucket's ``keep_empty_directories``
        setting."""
        return cls(bucket, bucket.settings.keep_empty_directories)

    def dont_keep_empty_directories(self) -> 'FilesystemAdapter':
        """Return an adapter that doesn't upload the empty directory marker.

        Empty directories then vanish from listings, the default behaviour of
        the store.
        """
        return FilesystemAdapter(self._bucket, False, self._tracker)

    @property
    def bucket(self) -> Bucket:
        return self._bucket

    @property
    def keeps_empty_directories(self) -> bool:
        return self._keep_empty_directories

    @property
    def tracker(self) -> LoadTracker:
        return self._tracker

    async def add(self, node: Node) -> None:
        """Write ``node`` at the root of the bucket.

        Raises:
            UploadError: If a file couldn't be uploaded
            DeleteError: If an obsolete key couldn't be deleted
        """
        await self._upload(Path.none(), node)

    async def get(self, name: str) -> Optional[Node]:
        """Read the node called ``name`` at the root of the bucket.

        A directory takes precedence over a file with the same name.

        Returns:
            The node, None if nothing exists under that name
        """
        validate_name(name)

        directory_path = Path((name,), True)
        if await self._bucket.contains(directory_path):
            directory = Directory.lazy(name, self._children_source(directory_path))
            self._tracker.record(directory, directory_path)
            return directory

        file_path = Path((name,), False)
        content = await self._bucket.get(file_path)
        if content is None:
            return None

        file = File(name, content)
        self._tracker.record(file, file_path)
        return file

    async def contains(self, name: str) -> bool:
        validate_name(name)
        return (
            await self._bucket.contains(Path((name,), False))
            or await self._bucket.contains(Path((name,), True))
        )

    async def remove(self, name: str) -> None:
        """Delete ``name`` and, if it is a directory, everything below it.

        Raises:
            DeleteError: If a key couldn't be deleted
        """
        validate_name(name)
        await self._do_remove(Path((name,), False))

    def root(self) -> Directory:
        """The bucket root as a lazily listed directory."""
        return Directory.lazy("root", self._children_source(Path.none()))

    def release(self, node: Node) -> None:
        """Forget where ``node`` was loaded from.

        Writing it back afterwards uploads it again.
        """
        self._tracker.release(node)

    # ------------------------------------------------------------------
    # Synchronization
    # ------------------------------------------------------------------

    def _resolve(self, root: Path, node: Node) -> Path:
        return root.resolve(Path((node.name,), node.kind is NodeKind.DIRECTORY))

    async def _upload(self, root: Path, node: Node) -> None:
        path = self._resolve(root, node)

        if self._tracker.matches(node, path):
            logger.debug(f"Skipping {path}, unchanged since it was loaded")
            return

        if node.kind is NodeKind.DIRECTORY:
            await self._remove_file_with_same_name(root, node)
            uploaded = await self._upload_files(path, node)
            await self._remove_files(uploaded, path, node)
            return

        # Read before deleting: deferred content may come from this very key
        body = await node.content.read()
        await self._do_remove(path)

        result = await self._bucket.upload(path, Content.of_bytes(body))
        result.raise_for_failure(UploadError, path=str(path), provider_name=self._bucket.name)
        logger.debug(f"Uploaded {path} ({len(body)} bytes)")

    async def _remove_file_with_same_name(self, root: Path, directory: Directory) -> None:
        possible_file = root.resolve(Path((directory.name,), False))
        if not await self._bucket.contains(possible_file):
            return

        logger.debug(f"Deleting file {possible_file} replaced by a directory")
        result = await self._bucket.delete(possible_file)
        result.raise_for_failure(DeleteError, path=str(possible_file), provider_name=self._bucket.name)

    async def _upload_files(self, path: Path, directory: Directory) -> Set[str]:
        uploaded: Set[str] = set()

        async for child in directory.files():
            await self._upload(path, child)
            uploaded.add(child.name)

        if self._keep_empty_directories:
            await self._upload(path, File(VOID_FILE))
            uploaded.add(VOID_FILE)

        return uploaded

    async def _remove_files(self, uploaded: Set[str], path: Path, directory: Directory) -> None:
        for name in sorted(directory.removed - uploaded):
            # A bare name doesn't say whether it was a file or a directory,
            # the recursive delete covers both
            await self._do_remove(self._resolve(path, File(name)))

    async def _do_remove(self, path: Path) -> None:
        directory = path.as_directory()

        async for child in self._bucket.list(directory):
            await self._do_remove(directory.resolve(child))

        result = await self._bucket.delete(path)
        result.raise_for_failure(DeleteError, path=str(path), provider_name=self._bucket.name)
        logger.debug(f"Deleted {path}")

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _children_source(self, folder: Path) -> ChildSource:
        def source() -> AsyncIterator[Node]:
            return self._children(folder)

        return source

    def _loader(self, path: Path):
        async def load() -> Optional[bytes]:
            content = await self._bucket.get(path)
            if content is None:
                return None
            return await content.read()

        return load

    async def _children(self, folder: Path) -> AsyncIterator[Node]:
        async for child in self._bucket.list(folder):
            if child.name == VOID_FILE:
                continue

            path = folder.resolve(child)
            try:
                if child.directory:
                    node: Node = Directory.lazy(child.name, self._children_source(path))
                else:
                    node = File(child.name, Content.deferred(self._loader(path)))
            except DomainError:
                logger.warning(f"Skipping '{path}', its name can't be used in a tree")
                continue

            self._tracker.record(node, path)
            yield node
