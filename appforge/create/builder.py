"""Creation Request Builder: turn a resolved draft into a CreationRequest."""

import os
from pathlib import Path

from ..core.models import ArtifactType, CreationRequest, Project
from .draft import CreationDraft

# Scalar fields each artifact type uses; everything else is left None
RELEVANT_FIELDS: dict[ArtifactType, frozenset[str]] = {
    ArtifactType.VIEW: frozenset({"name", "controller", "root_view", "route", "namespaces"}),
    ArtifactType.CONTROLLER: frozenset({"name", "modules"}),
    ArtifactType.CONTROL: frozenset({"name", "modules"}),
    ArtifactType.COMPONENT: frozenset({"name"}),
    ArtifactType.BOOTSTRAP: frozenset({"name", "theme"}),
}


def resolve_save_path(project: Project, base_dir: Path | str | None = None) -> Path:
    """Absolute path of the project's web-app root.

    Relative web-app paths are resolved against the project directory, then
    base_dir, then the current working directory.
    """
    root = project.path or base_dir or Path.cwd()
    return Path(os.path.abspath(Path(root) / project.webapp_path))


def build_creation_request(
    draft: CreationDraft, project: Project, base_dir: Path | str | None = None
) -> CreationRequest:
    """Build the final request. Pure apart from reading the cwd default.

    Raises:
        ValueError: If the draft has no artifact type.
    """
    artifact = draft.artifact
    if artifact is None:
        raise ValueError("Cannot build a creation request without an artifact type")
    relevant = RELEVANT_FIELDS[artifact]

    def scalar(field_name: str):
        return draft.value(field_name) if field_name in relevant else None

    def identifiers(slot_name: str):
        if slot_name not in relevant:
            return []
        return list(draft.value(slot_name) or [])

    return CreationRequest(
        type=artifact,
        name=scalar("name"),
        controller=scalar("controller"),
        root_view=scalar("root_view"),
        route=scalar("route"),
        theme=scalar("theme"),
        namespace_list=identifiers("namespaces"),
        module_list=identifiers("modules"),
        save_path=resolve_save_path(project, base_dir),
    )
