"""Tracking of nodes read out of a bucket.

The adapter records where each node it hands out was read from. When the
same instance comes back to ``add`` at the same path, nothing needs to be
written. The table is a cache: losing an entry only costs a redundant
upload.
"""

import logging
import weakref
from typing import Dict, Optional, Union

from ..core.models import Path
from .models import Directory, File

logger = logging.getLogger(__name__)


class LoadTracker:
    """Side table from node handles to the path they were loaded from.

    Entries are removed by ``release``. A finalizer also drops the entry of a
    node that gets garbage collected, so the table doesn't grow with nodes
    nobody references anymore.
    """

    def __init__(self):
        self._paths: Dict[int, Path] = {}
        self._finalizers: Dict[int, weakref.finalize] = {}

    def record(self, node: Union[File, Directory], path: Path) -> None:
        handle = node.handle
        self._paths[handle] = path
        if handle not in self._finalizers:
            self._finalizers[handle] = weakref.finalize(
                node, self._forget, self._paths, self._finalizers, handle
            )

    @staticmethod
    def _forget(paths: Dict[int, Path], finalizers: Dict[int, weakref.finalize], handle: int) -> None:
        paths.pop(handle, None)
        finalizers.pop(handle, None)

    def path_of(self, node: Union[File, Directory]) -> Optional[Path]:
        return self._paths.get(node.handle)

    def matches(self, node: Union[File, Directory], path: Path) -> bool:
        """Whether ``node`` was loaded from exactly ``path``."""
        return self._paths.get(node.handle) == path

    def release(self, node: Union[File, Directory]) -> None:
        self._paths.pop(node.handle, None)
        finalizer = self._finalizers.pop(node.handle, None)
        if finalizer is not None:
            finalizer.detach()

    def __contains__(self, node: Union[File, Directory]) -> bool:
        return node.handle in self._paths

    def __len__(self) -> int:
        return len(self._paths)
