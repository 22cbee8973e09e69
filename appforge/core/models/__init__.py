"""All Pydantic models for Appforge, organized by domain.

- project.py: dependency graph, resources, processed project
- request.py: artifact types, identifiers, arguments, creation request
"""

from .project import (
    APPLICATION_TYPE,
    DependencyNode,
    OwningProject,
    Resource,
    ProjectPaths,
    ProjectConfiguration,
    ProjectResources,
    Project,
)
from .request import (
    ArtifactType,
    ARTIFACT_LABELS,
    KnownIdentifier,
    CreateArgs,
    CreationRequest,
    GenerationResult,
    CreateOutcome,
)

__all__ = [
    # Project
    "APPLICATION_TYPE",
    "DependencyNode",
    "OwningProject",
    "Resource",
    "ProjectPaths",
    "ProjectConfiguration",
    "ProjectResources",
    "Project",
    # Request
    "ArtifactType",
    "ARTIFACT_LABELS",
    "KnownIdentifier",
    "CreateArgs",
    "CreationRequest",
    "GenerationResult",
    "CreateOutcome",
]
