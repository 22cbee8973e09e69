"""The create pipeline: resolve, validate and dispatch creation requests.

- index: known namespaces/modules/theme libraries from the dependencies
- validator: structural checks and identifier cross-checks
- interactive: question/answer state machine for missing fields
- builder: final CreationRequest with the computed save path
- dispatch: single-shot call into the generator
- pipeline: run_create, tying the steps together
"""

from .errors import (
    CreateError,
    MissingComponentError,
    MissingNameError,
    UnknownArtifactTypeError,
    UnsupportedProjectTypeError,
    NoValidIdentifierError,
    UnknownThemeError,
    ProjectNotFoundError,
    InteractionCancelledError,
    GenerationError,
)
from .index import ResourceIndex, walk_dependencies, list_components, list_theme_libraries
from .draft import CreationDraft, Slot, Source
from .validator import RequestValidator
from .interactive import InteractiveResolver, Question, QuestionKind, State
from .builder import build_creation_request, resolve_save_path
from .dispatch import dispatch
from .pipeline import CreateServices, run_create

__all__ = [
    # Errors
    "CreateError",
    "MissingComponentError",
    "MissingNameError",
    "UnknownArtifactTypeError",
    "UnsupportedProjectTypeError",
    "NoValidIdentifierError",
    "UnknownThemeError",
    "ProjectNotFoundError",
    "InteractionCancelledError",
    "GenerationError",
    # Index
    "ResourceIndex",
    "walk_dependencies",
    "list_components",
    "list_theme_libraries",
    # Draft
    "CreationDraft",
    "Slot",
    "Source",
    # Steps
    "RequestValidator",
    "InteractiveResolver",
    "Question",
    "QuestionKind",
    "State",
    "build_creation_request",
    "resolve_save_path",
    "dispatch",
    # Pipeline
    "CreateServices",
    "run_create",
]
