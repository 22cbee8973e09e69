"""Default collaborators backed by the local filesystem."""

from .loader import LocalProjectProvider
from .resources import FileSystemReader, FileSystemCollectionProvider

__all__ = [
    "LocalProjectProvider",
    "FileSystemReader",
    "FileSystemCollectionProvider",
]
