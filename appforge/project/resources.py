"""Filesystem-backed resource readers.

A dependency's source directory is exposed under a virtual path derived from
its namespace, e.g. files in ../sample-lib/src/ appear as
/resources/sample/... for a library with namespace "sample".
"""

import logging
from fnmatch import fnmatchcase
from pathlib import Path

from ..config import CreateConfig
from ..core.collaborators import (
    Reader,
    ReaderCollection,
    ResourceCollectionProvider,
    ResourceCollections,
)
from ..core.models import DependencyNode, OwningProject, Resource
from ..create.index import walk_dependencies

logger = logging.getLogger(__name__)


class FileSystemReader(Reader):
    """Lists the files of one dependency as virtual resources.

    Patterns use fnmatch semantics over the full virtual path, so both "*"
    and "**" cross directory boundaries.
    """

    def __init__(
        self,
        *,
        dependency_id: str,
        fs_base_path: Path | str,
        virtual_base_path: str,
        project: OwningProject,
        excludes: list[str] | None = None,
    ):
        self.dependency_id = dependency_id
        self.fs_base_path = Path(fs_base_path)
        self.virtual_base_path = "/" + virtual_base_path.strip("/") + "/"
        self.project = project
        self.excludes = excludes or []

    def by_glob(self, pattern: str) -> list[Resource]:
        if not self.fs_base_path.is_dir():
            logger.debug("%s: %s does not exist", self.dependency_id, self.fs_base_path)
            return []

        resources = []
        for file in sorted(self.fs_base_path.rglob("*")):
            if not file.is_file():
                continue
            virtual_path = self.virtual_base_path + file.relative_to(self.fs_base_path).as_posix()
            if not fnmatchcase(virtual_path, pattern):
                continue
            if any(fnmatchcase(virtual_path, ex) for ex in self.excludes):
                continue
            resources.append(Resource(path=virtual_path, owning_project=self.project))
        return resources

    def __repr__(self) -> str:
        return f"FileSystemReader({self.dependency_id!r}, {self.virtual_base_path!r})"


class FileSystemCollectionProvider(ResourceCollectionProvider):
    """One reader per direct dependency that has a location on disk."""

    def __init__(self, settings: CreateConfig | None = None):
        self.settings = settings or CreateConfig()

    def reader_for(self, dep: DependencyNode) -> FileSystemReader | None:
        if dep.path is None:
            return None
        paths = dep.configuration.get("paths") or {}
        src = paths.get("src", self.settings.default_src)
        name = dep.metadata.get("name") or dep.id
        namespace = dep.metadata.get("namespace") or name.replace(".", "/")
        return FileSystemReader(
            dependency_id=dep.id,
            fs_base_path=Path(dep.path) / src,
            virtual_base_path=f"/resources/{namespace}/",
            project=OwningProject(name=name, type=dep.type, metadata=dep.metadata),
            excludes=list(dep.configuration.get("excludes") or []),
        )

    def create_collections_for_tree(self, tree: DependencyNode) -> ResourceCollections:
        readers = []
        for dep in walk_dependencies(tree, max_depth=1):
            reader = self.reader_for(dep)
            if reader is None:
                logger.debug("No location for dependency %s, skipping", dep.id)
                continue
            readers.append(reader)
        return ResourceCollections(dependencies=ReaderCollection(readers=readers))
