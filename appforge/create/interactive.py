"""Interactive Resolver: fill missing request fields by asking the user.

The resolver is a small finite-state machine. The state is the field
currently being resolved; the order of states is fixed per artifact type by
ARTIFACT_FLOWS. A state whose field was already supplied on the command line
is skipped without asking. Exactly one question is pending at any time.

Adding an artifact type means adding a flow entry (and, if it needs a new
field, one state with its handler); existing states are untouched.
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from ..core.collaborators import PromptRunner
from ..core.models import ArtifactType, ARTIFACT_LABELS, Project
from .draft import CreationDraft, Source
from .errors import (
    InteractionCancelledError,
    MissingNameError,
    UnknownArtifactTypeError,
    UnknownThemeError,
)
from .index import ResourceIndex

logger = logging.getLogger(__name__)

NONE_CHOICE = "none"


class QuestionKind(str, Enum):
    SELECT = "select"
    MULTISELECT = "multiselect"
    INPUT = "input"
    CONFIRM = "confirm"


class Question(BaseModel):
    """One prompt handed to a PromptRunner.

    Expected answers: SELECT -> one of choices, MULTISELECT -> list of
    choices, INPUT -> str (may be empty unless required), CONFIRM -> bool.
    """

    name: str
    kind: QuestionKind
    message: str
    choices: list[str] = Field(default_factory=list)
    default: Any = None
    required: bool = False


class State(str, Enum):
    SELECT_ARTIFACT_TYPE = "select_artifact_type"
    ASK_NAME = "ask_name"
    ASK_CONTROLLER = "ask_controller"
    ASK_ROOT_VIEW = "ask_root_view"
    ASK_ROUTE = "ask_route"
    SELECT_NAMESPACES = "select_namespaces"
    SELECT_MODULES = "select_modules"
    ASK_THEME = "ask_theme"
    DONE = "done"


COMMON_FLOW: tuple[State, ...] = (State.SELECT_ARTIFACT_TYPE, State.ASK_NAME)

ARTIFACT_FLOWS: dict[ArtifactType, tuple[State, ...]] = {
    ArtifactType.VIEW: (
        State.ASK_CONTROLLER,
        State.ASK_ROOT_VIEW,
        State.ASK_ROUTE,
        State.SELECT_NAMESPACES,
    ),
    ArtifactType.CONTROLLER: (State.SELECT_MODULES,),
    ArtifactType.CONTROL: (State.SELECT_MODULES,),
    ArtifactType.COMPONENT: (),
    ArtifactType.BOOTSTRAP: (State.ASK_THEME,),
}


def flow_for(artifact: ArtifactType | None) -> tuple[State, ...]:
    """Ordered states for an artifact type (common states only if unknown)."""
    if artifact is None:
        return COMMON_FLOW
    return COMMON_FLOW + ARTIFACT_FLOWS[artifact]


class InteractiveResolver:
    """Resolves pending draft slots one question at a time."""

    def __init__(self, runner: PromptRunner, index: ResourceIndex, project: Project):
        self.runner = runner
        self.index = index
        self.project = project
        self._handlers: dict[State, Callable[[CreationDraft], CreationDraft]] = {
            State.SELECT_ARTIFACT_TYPE: self._select_artifact_type,
            State.ASK_NAME: self._ask_name,
            State.ASK_CONTROLLER: self._ask_controller,
            State.ASK_ROOT_VIEW: self._ask_root_view,
            State.ASK_ROUTE: self._ask_route,
            State.SELECT_NAMESPACES: self._select_namespaces,
            State.SELECT_MODULES: self._select_modules,
            State.ASK_THEME: self._ask_theme,
        }

    def resolve(self, draft: CreationDraft) -> CreationDraft:
        """Run the machine from the first state until DONE.

        Raises:
            InteractionCancelledError: The user aborted a prompt.
        """
        state = State.SELECT_ARTIFACT_TYPE
        while state is not State.DONE:
            draft = self._handlers[state](draft)
            state = self._next_state(state, draft)
        logger.debug("Interactive resolution finished: %s", draft.provenance())
        return draft

    @staticmethod
    def _next_state(state: State, draft: CreationDraft) -> State:
        flow = flow_for(draft.artifact)
        position = flow.index(state) + 1
        return flow[position] if position < len(flow) else State.DONE

    def _ask(self, question: Question) -> Any:
        answer = self.runner.run(question)
        logger.debug("Answer for %s: %r", question.name, answer)
        return answer

    def _skip(self, state: State, reason: str) -> None:
        logger.debug("Skipping %s: %s", state.value, reason)

    # ── Handlers ──

    def _select_artifact_type(self, draft: CreationDraft) -> CreationDraft:
        if not draft.type.pending:
            self._skip(State.SELECT_ARTIFACT_TYPE, "supplied on the command line")
            return draft
        answer = self._ask(
            Question(
                name="type",
                kind=QuestionKind.SELECT,
                message="What do you want to add?",
                choices=list(ARTIFACT_LABELS.values()),
                required=True,
            )
        )
        if not answer:
            raise InteractionCancelledError()
        try:
            artifact = ArtifactType.parse(answer)
        except ValueError:
            raise UnknownArtifactTypeError(str(answer)) from None
        return draft.resolve("type", artifact, Source.PROMPT)

    def _ask_name(self, draft: CreationDraft) -> CreationDraft:
        if not draft.name.pending:
            self._skip(State.ASK_NAME, "supplied on the command line")
            return draft
        artifact = draft.artifact
        required = artifact.requires_name
        suffix = "" if required else " (optional)"
        answer = self._ask(
            Question(
                name="name",
                kind=QuestionKind.INPUT,
                message=f"Name of the {artifact.label.lower()}{suffix}",
                required=required,
            )
        )
        value = str(answer).strip() if answer is not None else ""
        if required and not value:
            raise MissingNameError()
        return draft.resolve("name", value or None, Source.PROMPT)

    def _ask_controller(self, draft: CreationDraft) -> CreationDraft:
        if not draft.controller.pending:
            self._skip(State.ASK_CONTROLLER, "supplied on the command line")
            return draft
        answer = self._ask(
            Question(
                name="controller",
                kind=QuestionKind.CONFIRM,
                message="Create a corresponding controller?",
                default=True,
            )
        )
        return draft.resolve("controller", bool(answer), Source.PROMPT)

    def _entry_decided(self, draft: CreationDraft) -> bool:
        return not (draft.root_view.pending and draft.route.pending)

    def _ask_root_view(self, draft: CreationDraft) -> CreationDraft:
        if self._entry_decided(draft):
            self._skip(State.ASK_ROOT_VIEW, "root view or route supplied on the command line")
            return draft
        if self.project.entry_point is not None:
            self._skip(State.ASK_ROOT_VIEW, f"project already boots {self.project.entry_point}")
            return draft
        answer = self._ask(
            Question(
                name="root_view",
                kind=QuestionKind.CONFIRM,
                message="Use this view as the root view of the application?",
                default=True,
            )
        )
        return draft.resolve("root_view", bool(answer), Source.PROMPT)

    def _ask_route(self, draft: CreationDraft) -> CreationDraft:
        if self._entry_decided(draft):
            self._skip(State.ASK_ROUTE, "root view or route already decided")
            return draft
        if self.project.entry_point is None:
            self._skip(State.ASK_ROUTE, "project has no entry point yet")
            return draft
        answer = self._ask(
            Question(
                name="route",
                kind=QuestionKind.CONFIRM,
                message="Add a route to this view?",
                default=False,
            )
        )
        return draft.resolve("route", bool(answer), Source.PROMPT)

    def _select_identifiers(
        self, draft: CreationDraft, state: State, slot_name: str, message: str
    ) -> CreationDraft:
        if not getattr(draft, slot_name).pending:
            self._skip(state, "supplied on the command line")
            return draft
        choices = [i.name for i in self.index.components()]
        if not choices:
            self._skip(state, "no libraries among the dependencies")
            return draft.resolve(slot_name, [], Source.DEFAULT)
        answer = self._ask(
            Question(
                name=slot_name,
                kind=QuestionKind.MULTISELECT,
                message=message,
                choices=choices,
                default=[],
            )
        )
        selected = self.index.match(list(answer or []))
        return draft.resolve(slot_name, selected, Source.PROMPT)

    def _select_namespaces(self, draft: CreationDraft) -> CreationDraft:
        return self._select_identifiers(
            draft,
            State.SELECT_NAMESPACES,
            "namespaces",
            "Which libraries should the view use?",
        )

    def _select_modules(self, draft: CreationDraft) -> CreationDraft:
        return self._select_identifiers(
            draft,
            State.SELECT_MODULES,
            "modules",
            "Which modules should be required?",
        )

    def _ask_theme(self, draft: CreationDraft) -> CreationDraft:
        if not draft.theme.pending:
            self._skip(State.ASK_THEME, "supplied on the command line")
            return draft
        themes = self.index.theme_names()
        if not themes:
            self._skip(State.ASK_THEME, "no theme libraries among the dependencies")
            return draft.resolve("theme", None, Source.DEFAULT)
        answer = self._ask(
            Question(
                name="theme",
                kind=QuestionKind.SELECT,
                message="Which theme should the bootstrap use?",
                choices=themes + [NONE_CHOICE],
                default=NONE_CHOICE,
            )
        )
        if not answer or str(answer).strip().lower() == NONE_CHOICE:
            return draft.resolve("theme", None, Source.PROMPT)
        theme = self.index.match_theme(str(answer))
        if theme is None:
            raise UnknownThemeError(str(answer))
        return draft.resolve("theme", theme, Source.PROMPT)
