"""Error taxonomy for the create pipeline.

Every failure is terminal. The message strings are part of the command's
observable contract; callers match on them.
"""

from ..cli.utils import ExitCode


class CreateError(Exception):
    """Base class for create pipeline failures."""

    message: str = "Create command failed"
    exit_code: int = ExitCode.VALIDATION_ERROR
    suggestion: str | None = None

    def __init__(self, message: str | None = None, *, suggestion: str | None = None):
        super().__init__(message or self.message)
        if suggestion is not None:
            self.suggestion = suggestion


class MissingComponentError(CreateError):
    message = (
        "Component needed. You can run this command without component "
        "in interactive mode"
    )
    suggestion = "appforge create (--interactive, -i)"


class MissingNameError(CreateError):
    message = (
        "Missing mandatory parameter 'name'. You can run this command "
        "without name in interactive mode"
    )
    suggestion = "appforge create <component> (--interactive, -i)"


class UnknownArtifactTypeError(CreateError):
    def __init__(self, token: str):
        from ..core.models import ArtifactType

        valid = ", ".join(t.value for t in ArtifactType)
        super().__init__(f"Unknown component '{token}'. Valid components: {valid}")
        self.token = token


class UnsupportedProjectTypeError(CreateError):
    message = (
        "Create command is currently only supported for projects of type "
        "application"
    )
    exit_code = ExitCode.UNSUPPORTED_PROJECT


class NoValidIdentifierError(CreateError):
    message = (
        "No valid library/module provided. Use the add command to add the "
        "needed library."
    )


class UnknownThemeError(NoValidIdentifierError):
    def __init__(self, theme: str):
        super().__init__(
            f"No valid theme library provided for theme '{theme}'. "
            "Use the add command to add the needed theme library."
        )
        self.theme = theme


class ProjectNotFoundError(CreateError):
    exit_code = ExitCode.FILE_NOT_FOUND


class InteractionCancelledError(CreateError):
    message = "Cancelled"
    exit_code = ExitCode.USER_CANCELLED


class GenerationError(CreateError):
    message = "Internal error while adding component"
    exit_code = ExitCode.GENERATION_ERROR
