"""Abstract interfaces for the collaborators the create pipeline consumes.

The pipeline never builds trees, lists files, renders prompts or writes
artifacts itself. It talks to these interfaces; default implementations
live in appforge.project, appforge.cli.prompts and appforge.generators.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, TYPE_CHECKING

from .models import (
    DependencyNode,
    Project,
    Resource,
    CreationRequest,
    GenerationResult,
)

if TYPE_CHECKING:
    from ..create.interactive import Question


class DependencyTreeProvider(ABC):
    """Builds the dependency graph and the processed root project."""

    @abstractmethod
    def generate_dependency_tree(self) -> DependencyNode:
        """Build the dependency graph rooted at the project."""

    @abstractmethod
    def generate_project_tree(self, tree: DependencyNode) -> DependencyNode:
        """Normalize the tree, attaching each node's configuration."""

    @abstractmethod
    def process_tree(self, project_tree: DependencyNode) -> Project:
        """Turn the normalized root into a Project."""


class Reader(ABC):
    """Lists the virtual resources of one dependency."""

    dependency_id: str = ""

    @abstractmethod
    def by_glob(self, pattern: str) -> list[Resource]:
        """Return the resources whose virtual path matches pattern."""


@dataclass
class ReaderCollection:
    """Readers for a set of dependencies, in collection order."""

    readers: list[Reader] = field(default_factory=list)

    def readers_for(self, dependency_id: str) -> list[Reader]:
        return [r for r in self.readers if r.dependency_id == dependency_id]


@dataclass
class ResourceCollections:
    dependencies: ReaderCollection = field(default_factory=ReaderCollection)


class ResourceCollectionProvider(ABC):
    @abstractmethod
    def create_collections_for_tree(self, tree: DependencyNode) -> ResourceCollections:
        """Create readers for the dependencies of tree."""


class PromptRunner(ABC):
    """Asks one question and blocks until it is answered.

    Implementations raise InteractionCancelledError when the user aborts.
    """

    @abstractmethod
    def run(self, question: "Question") -> Any:
        """Return the answer for question."""


class Generator(ABC):
    """Turns a creation request into files. Called at most once per run."""

    @abstractmethod
    def create(
        self,
        *,
        name: str | None,
        meta_information: CreationRequest,
        project: Project,
    ) -> GenerationResult | None:
        """Generate the artifact and report a status message."""
