"""Resource Index: which namespaces, modules and theme libraries exist.

Identifiers are derived from the resources each direct dependency exposes,
not from the dependency ids themselves: a library is known by the namespace
of the project that owns its resources.
"""

import logging
from collections import deque
from collections.abc import Iterable, Iterator

from ..core.collaborators import ResourceCollections
from ..core.models import DependencyNode, KnownIdentifier, Resource

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE_GLOB = "/resources/**/*"
DEFAULT_THEME_LIBRARY_TYPE = "theme-library"


def walk_dependencies(
    tree: DependencyNode, max_depth: int | None = None
) -> Iterator[DependencyNode]:
    """Breadth-first walk over the dependencies of tree.

    Each node id is yielded once, even when the graph shares a dependency
    between several parents. The root itself is not yielded.

    Args:
        tree: Root node
        max_depth: 1 for direct dependencies only, None for the whole graph

    Yields:
        Dependency nodes in declaration order, level by level
    """
    visited: set[str] = {tree.id}
    queue: deque[tuple[DependencyNode, int]] = deque(
        (dep, 1) for dep in tree.dependencies
    )
    while queue:
        node, depth = queue.popleft()
        if node.id in visited:
            continue
        visited.add(node.id)
        yield node
        if max_depth is None or depth < max_depth:
            queue.extend((dep, depth + 1) for dep in node.dependencies)


def _scan(
    tree: DependencyNode, collections: ResourceCollections, pattern: str
) -> Iterator[tuple[DependencyNode, Resource]]:
    """Yield (dependency, resource) pairs for every direct dependency."""
    for dep in walk_dependencies(tree, max_depth=1):
        for reader in collections.dependencies.readers_for(dep.id):
            resources = reader.by_glob(pattern)
            logger.debug("Dependency %s: %d resources match %s", dep.id, len(resources), pattern)
            for resource in resources:
                yield dep, resource


def _dedupe(names: Iterable[str]) -> list[KnownIdentifier]:
    seen: dict[str, KnownIdentifier] = {}
    for name in names:
        identifier = KnownIdentifier(name=name)
        # First occurrence wins, keeping dependency-declaration order
        seen.setdefault(identifier.name, identifier)
    return list(seen.values())


def list_components(
    tree: DependencyNode,
    collections: ResourceCollections,
    pattern: str = DEFAULT_RESOURCE_GLOB,
) -> list[KnownIdentifier]:
    """Namespaces of every library the direct dependencies expose."""
    return _dedupe(
        resource.owning_project.namespace
        for _, resource in _scan(tree, collections, pattern)
        if resource.owning_project.namespace
    )


def list_theme_libraries(
    tree: DependencyNode,
    collections: ResourceCollections,
    pattern: str = DEFAULT_RESOURCE_GLOB,
    theme_library_type: str = DEFAULT_THEME_LIBRARY_TYPE,
) -> list[KnownIdentifier]:
    """Names of the theme libraries among the direct dependencies."""

    def names() -> Iterator[str]:
        for dep, resource in _scan(tree, collections, pattern):
            owner = resource.owning_project
            if (owner.type or dep.type) != theme_library_type:
                continue
            name = owner.metadata.get("name") or owner.name
            if name:
                yield name

    return _dedupe(names())


class ResourceIndex:
    """Per-invocation view of the known identifiers.

    Each list is computed on first access and cached, so repeated lookups
    during validation and prompting see the same sequence and trigger no
    further scanning.
    """

    def __init__(
        self,
        tree: DependencyNode,
        collections: ResourceCollections,
        *,
        pattern: str = DEFAULT_RESOURCE_GLOB,
        theme_library_type: str = DEFAULT_THEME_LIBRARY_TYPE,
        theme_library_prefix: str = "themelib_",
    ):
        self.tree = tree
        self.collections = collections
        self.pattern = pattern
        self.theme_library_type = theme_library_type
        self.theme_library_prefix = theme_library_prefix.lower()
        self._components: list[KnownIdentifier] | None = None
        self._theme_libraries: list[KnownIdentifier] | None = None

    def components(self) -> list[KnownIdentifier]:
        if self._components is None:
            self._components = list_components(self.tree, self.collections, self.pattern)
            logger.info(
                "Known components: %s",
                ", ".join(i.name for i in self._components) or "(none)",
            )
        return self._components

    def theme_libraries(self) -> list[KnownIdentifier]:
        if self._theme_libraries is None:
            self._theme_libraries = list_theme_libraries(
                self.tree, self.collections, self.pattern, self.theme_library_type
            )
            logger.info(
                "Known theme libraries: %s",
                ", ".join(i.name for i in self._theme_libraries) or "(none)",
            )
        return self._theme_libraries

    def theme_names(self) -> list[str]:
        """Theme names offered to the user, library prefix removed."""
        return [self.theme_name(lib) for lib in self.theme_libraries()]

    def theme_name(self, library: KnownIdentifier) -> str:
        prefix = self.theme_library_prefix
        if prefix and library.name.startswith(prefix) and len(library.name) > len(prefix):
            return library.name[len(prefix):]
        return library.name

    def match(self, requested: list[str]) -> list[KnownIdentifier]:
        """Known components whose name matches one of requested.

        Matching is case-insensitive. The result follows index order, not
        the order of requested.
        """
        wanted = {r.strip().lower() for r in requested if r and r.strip()}
        return [i for i in self.components() if i.name in wanted]

    def match_theme(self, theme: str) -> str | None:
        """Canonical theme name for theme, or None if no library provides it.

        A theme matches a library named after it, with or without the
        theme library prefix. The first library in index order wins.
        """
        wanted = theme.strip().lower()
        if not wanted:
            return None
        for library in self.theme_libraries():
            if wanted in (library.name, self.theme_name(library)):
                return self.theme_name(library)
        return None
