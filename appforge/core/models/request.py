"""Creation request models.

The CreationRequest is the single value the create pipeline produces and
hands to a generator. CreateArgs is the argument surface it starts from.
"""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Artifact types
# =============================================================================


class ArtifactType(str, Enum):
    VIEW = "view"
    CONTROLLER = "controller"
    CONTROL = "control"
    COMPONENT = "component"
    BOOTSTRAP = "bootstrap"

    @property
    def label(self) -> str:
        """Display label used in interactive selection."""
        return ARTIFACT_LABELS[self]

    @property
    def requires_name(self) -> bool:
        return self not in (ArtifactType.COMPONENT, ArtifactType.BOOTSTRAP)

    @classmethod
    def parse(cls, token: "str | ArtifactType") -> "ArtifactType":
        """Map a value or display label onto an ArtifactType.

        Case and separator insensitive:
            "view" -> VIEW
            "Custom Control" -> CONTROL
            "custom-control" -> CONTROL

        Raises:
            ValueError: If the token names no artifact type.
        """
        if isinstance(token, ArtifactType):
            return token
        key = " ".join(str(token).replace("-", " ").replace("_", " ").lower().split())
        try:
            return _ARTIFACT_LOOKUP[key]
        except KeyError:
            raise ValueError(f"Unknown artifact type: {token!r}") from None


ARTIFACT_LABELS: dict[ArtifactType, str] = {
    ArtifactType.VIEW: "View",
    ArtifactType.CONTROLLER: "Controller",
    ArtifactType.CONTROL: "Custom Control",
    ArtifactType.COMPONENT: "Component",
    ArtifactType.BOOTSTRAP: "Bootstrap",
}

_ARTIFACT_LOOKUP: dict[str, ArtifactType] = {
    **{t.value: t for t in ArtifactType},
    **{label.lower(): t for t, label in ARTIFACT_LABELS.items()},
}


# =============================================================================
# Identifiers
# =============================================================================


class KnownIdentifier(BaseModel):
    """A validated namespace, module or theme library reference."""

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def _lower(cls, v: str) -> str:
        return v.lower()


# =============================================================================
# Arguments and request
# =============================================================================


class CreateArgs(BaseModel):
    """Arguments as supplied on the command line. None means not supplied."""

    artifact: str | None = None
    name: str | None = None
    controller: bool | None = None
    route: bool | None = None
    root: bool | None = None
    theme: str | None = None
    namespaces: list[str] | None = None
    modules: list[str] | None = None
    interactive: bool = False


class CreationRequest(BaseModel):
    """Fully-resolved description of the artifact to generate.

    Scalar fields irrelevant to the artifact type are None. The identifier
    lists are always present and empty when irrelevant or not supplied.
    """

    model_config = ConfigDict(frozen=True)

    type: ArtifactType
    name: str | None = None
    controller: bool | None = None
    root_view: bool | None = None
    route: bool | None = None
    theme: str | None = None
    namespace_list: list[KnownIdentifier] = Field(default_factory=list)
    module_list: list[KnownIdentifier] = Field(default_factory=list)
    save_path: Path

    def to_meta_information(self) -> dict[str, Any]:
        """Camel-cased mapping for generators that consume plain dicts."""
        return {
            "type": self.type.value,
            "name": self.name,
            "controller": self.controller,
            "rootView": self.root_view,
            "route": self.route,
            "theme": self.theme,
            "namespaceList": [{"name": i.name} for i in self.namespace_list],
            "moduleList": [{"name": i.name} for i in self.module_list],
            "savePath": str(self.save_path),
        }


# =============================================================================
# Generator result and pipeline outcome
# =============================================================================


class GenerationResult(BaseModel):
    status_message: str | None = None


class CreateOutcome(BaseModel):
    """What a successful create run reports back to its caller."""

    message: str
    request: CreationRequest
