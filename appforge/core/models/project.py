"""Project and dependency models for Appforge.

These are the shapes the external collaborators hand to the create pipeline:
- DependencyNode: one node of the (possibly shared) dependency graph
- Resource / OwningProject: a file listed by a dependency's reader
- Project: the processed root project the artifact is added to
"""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


APPLICATION_TYPE = "application"


# =============================================================================
# Dependency graph
# =============================================================================


class DependencyNode(BaseModel):
    """A project in the dependency graph.

    The root node is the project itself. Shared dependencies may appear under
    several parents as the same node id, so walks must dedupe by id.
    """

    id: str
    type: str = "library"
    metadata: dict[str, Any] = Field(default_factory=dict)
    path: Path | None = None
    configuration: dict[str, Any] = Field(default_factory=dict)
    dependencies: list["DependencyNode"] = Field(default_factory=list)


# =============================================================================
# Resources
# =============================================================================


class OwningProject(BaseModel):
    """The project a resource belongs to."""

    name: str = ""
    type: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def namespace(self) -> str | None:
        """Namespace identity, falling back to the project name."""
        return self.metadata.get("namespace") or self.metadata.get("name") or None


class Resource(BaseModel):
    """A virtual file listed by a reader."""

    model_config = ConfigDict(frozen=True)

    path: str
    owning_project: OwningProject


# =============================================================================
# Processed project
# =============================================================================


class ProjectPaths(BaseModel):
    webapp: str = "webapp"
    src: str = "src"


class ProjectConfiguration(BaseModel):
    paths: ProjectPaths = Field(default_factory=ProjectPaths)


class ProjectResources(BaseModel):
    configuration: ProjectConfiguration = Field(default_factory=ProjectConfiguration)


class Project(BaseModel):
    """The processed root project.

    entry_point is the root view the application already boots with, if any.
    path is the project directory; save paths are resolved against it.
    """

    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    path: Path | None = None
    entry_point: str | None = None
    resources: ProjectResources = Field(default_factory=ProjectResources)

    @property
    def webapp_path(self) -> str:
        return self.resources.configuration.paths.webapp

    @property
    def is_application(self) -> bool:
        return self.type == APPLICATION_TYPE
