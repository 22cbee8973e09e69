"""Request Validator: structural checks and identifier cross-checks.

Checks run in a fixed order so that error precedence is stable and no
resource scanning happens for a request that is going to fail anyway:

1. check_arguments: artifact type and name present (non-interactive only)
2. check_project: the target project is an application
3. check_identifiers: supplied namespaces/modules/theme exist among the
   dependencies (this is the first step that touches the Resource Index)

validate() is the same set of rules as a pure predicate over a built
CreationRequest.
"""

import logging

from ..core.models import ArtifactType, CreationRequest, Project
from .draft import CreationDraft, Source
from .errors import (
    MissingComponentError,
    MissingNameError,
    NoValidIdentifierError,
    UnknownThemeError,
    UnsupportedProjectTypeError,
)
from .index import ResourceIndex

logger = logging.getLogger(__name__)

# Which identifier list each artifact type consumes
IDENTIFIER_SLOTS: dict[ArtifactType, str] = {
    ArtifactType.VIEW: "namespaces",
    ArtifactType.CONTROLLER: "modules",
    ArtifactType.CONTROL: "modules",
}


class RequestValidator:
    """Validates a draft (and later the built request) for one invocation."""

    def __init__(self, *, interactive: bool = False):
        self.interactive = interactive

    def check_arguments(self, draft: CreationDraft) -> None:
        """Fail fast on missing arguments.

        Interactive invocations skip this: missing fields are asked for.

        Raises:
            MissingComponentError: No artifact type was given.
            MissingNameError: The artifact type needs a name and none was given.
        """
        if self.interactive:
            return
        artifact = draft.artifact
        if artifact is None:
            raise MissingComponentError()
        if artifact.requires_name and not draft.value("name"):
            raise MissingNameError()

    def check_project(self, project: Project) -> None:
        """Raises UnsupportedProjectTypeError unless project is an application."""
        if not project.is_application:
            logger.debug("Rejecting project of type %r", project.type)
            raise UnsupportedProjectTypeError()

    def check_identifiers(
        self, draft: CreationDraft, index: ResourceIndex
    ) -> CreationDraft:
        """Replace supplied identifier strings with known identifiers.

        A supplied list that matches nothing fails; a list that was not
        supplied stays pending (defaulted to empty later). Lists and themes
        that the chosen artifact type does not use are ignored.

        Raises:
            NoValidIdentifierError: A non-empty namespaces/modules list matched nothing.
            UnknownThemeError: The supplied theme matches no theme library.
        """
        artifact = draft.artifact

        for slot_name in ("namespaces", "modules"):
            slot = getattr(draft, slot_name)
            if slot.pending or slot.source is not Source.ARGV:
                continue
            if artifact is not None and IDENTIFIER_SLOTS.get(artifact) != slot_name:
                logger.warning("--%s is ignored for %s", slot_name, artifact.value)
                continue

            requested: list[str] = slot.value
            matched = index.match(requested)
            if requested and not matched:
                raise NoValidIdentifierError()
            unmatched = sorted(
                {r.lower() for r in requested} - {i.name for i in matched}
            )
            if unmatched:
                logger.warning("Ignoring unknown %s: %s", slot_name, ", ".join(unmatched))
            draft = draft.resolve(slot_name, matched, Source.ARGV)

        theme_slot = draft.theme
        if not theme_slot.pending and theme_slot.source is Source.ARGV:
            if artifact is None or artifact is ArtifactType.BOOTSTRAP:
                theme = index.match_theme(theme_slot.value)
                if theme is None:
                    raise UnknownThemeError(theme_slot.value)
                draft = draft.resolve("theme", theme, Source.ARGV)
            else:
                logger.warning("--theme is ignored for %s", artifact.value)

        return draft

    def validate(
        self, request: CreationRequest, project: Project, index: ResourceIndex
    ) -> CreationRequest:
        """Check a built request and return it unchanged.

        Re-running this on a valid request never raises; the request is not
        modified.
        """
        if request.type.requires_name and not request.name:
            raise MissingNameError()
        self.check_project(project)

        for identifiers in (request.namespace_list, request.module_list):
            if not identifiers:
                continue
            known = {i.name for i in index.components()}
            if any(i.name not in known for i in identifiers):
                raise NoValidIdentifierError()

        if request.theme is not None and index.match_theme(request.theme) is None:
            raise UnknownThemeError(request.theme)

        return request
