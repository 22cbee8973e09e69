"""Create pipeline: from arguments to a dispatched creation request.

Order of steps (each may end the run with a CreateError):

1. Parse arguments into a draft; structural argument checks
2. Load the project; project type check
3. Build resource collections and the Resource Index
4. Cross-check supplied identifiers
5. Interactive resolution of whatever is still missing (interactive only)
6. Build the request and validate it
7. Dispatch to the generator (the only side effect)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ..config import CreateConfig
from ..core.collaborators import (
    DependencyTreeProvider,
    Generator,
    PromptRunner,
    ResourceCollectionProvider,
)
from ..core.models import CreateArgs, CreateOutcome
from .builder import build_creation_request
from .dispatch import dispatch
from .draft import CreationDraft
from .index import ResourceIndex
from .interactive import InteractiveResolver
from .validator import RequestValidator

logger = logging.getLogger(__name__)


@dataclass
class CreateServices:
    """The collaborators one create run talks to."""

    projects: DependencyTreeProvider
    resources: ResourceCollectionProvider
    generator: Generator
    prompts: PromptRunner | None = None
    settings: CreateConfig = field(default_factory=CreateConfig)
    base_dir: Path | None = None


def run_create(args: CreateArgs, services: CreateServices) -> CreateOutcome:
    """Resolve, validate and dispatch one creation request.

    Raises:
        CreateError: Any validation, cancellation or generation failure.
        ValueError: Interactive mode was requested without a prompt runner.
    """
    if args.interactive and services.prompts is None:
        raise ValueError("Interactive mode requires a prompt runner")

    validator = RequestValidator(interactive=args.interactive)

    # Step 1: cheap structural checks, before any project I/O
    draft = CreationDraft.from_args(args)
    validator.check_arguments(draft)

    # Step 2: project type
    tree = services.projects.generate_dependency_tree()
    project = services.projects.process_tree(
        services.projects.generate_project_tree(tree)
    )
    validator.check_project(project)

    # Step 3: resource index (lazy, nothing is scanned until first lookup)
    settings = services.settings
    index = ResourceIndex(
        tree,
        services.resources.create_collections_for_tree(tree),
        pattern=settings.resource_glob,
        theme_library_type=settings.theme_library_type,
        theme_library_prefix=settings.theme_library_prefix,
    )

    # Step 4: identifier cross-checks. Without a type yet (interactive), the
    # check waits until the type has been chosen.
    checked = draft.artifact is not None
    if checked:
        draft = validator.check_identifiers(draft, index)

    # Step 5: fill the gaps
    if args.interactive:
        draft = InteractiveResolver(services.prompts, index, project).resolve(draft)
        if not checked:
            draft = validator.check_identifiers(draft, index)

    # Step 6: build and validate
    request = build_creation_request(draft, project, services.base_dir)
    request = validator.validate(request, project, index)
    logger.info("Creation request: %s", request.model_dump(mode="json"))

    # Step 7: single-shot dispatch
    message = dispatch(services.generator, request, project)
    return CreateOutcome(message=message, request=request)
