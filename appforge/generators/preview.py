"""Preview generator: reports what would be created, writes nothing."""

import logging

from ..core.collaborators import Generator
from ..core.models import ArtifactType, CreationRequest, GenerationResult, Project

logger = logging.getLogger(__name__)


def describe_request(request: CreationRequest) -> str:
    """Status line for a creation request.

    Examples:
        view                      -> "Add new view"
        view + controller         -> "Add new view with corresponding controller"
        view + controller + route -> "Add new view with corresponding controller and route to project"
        bootstrap                 -> "Create bootstrap for project"
    """
    if request.type is ArtifactType.VIEW:
        if request.controller and request.route:
            return "Add new view with corresponding controller and route to project"
        if request.controller:
            return "Add new view with corresponding controller"
        if request.route:
            return "Add new view with route to project"
        return "Add new view"
    if request.type is ArtifactType.COMPONENT:
        return "Add new Component to project"
    if request.type is ArtifactType.BOOTSTRAP:
        return "Create bootstrap for project"
    return f"Add new {request.type.value}"


class PreviewGenerator(Generator):
    """Default generator when none is configured."""

    def create(
        self,
        *,
        name: str | None,
        meta_information: CreationRequest,
        project: Project,
    ) -> GenerationResult:
        logger.info(
            "Preview only, nothing written to %s", meta_information.save_path
        )
        return GenerationResult(status_message=describe_request(meta_information))
