"""Filesystem view of a bucket.

This package provides the tree model (files and directories), the tracking of
nodes read from a bucket and the adapter synchronizing trees with it.
"""

from .models import ChildSource, Directory, File, Node, NodeKind, validate_name
from .tracking import LoadTracker
from .adapter import FilesystemAdapter, VOID_FILE

__all__ = [
    "ChildSource",
    "Directory",
    "File",
    "Node",
    "NodeKind",
    "validate_name",
    "LoadTracker",
    "FilesystemAdapter",
    "VOID_FILE",
]
