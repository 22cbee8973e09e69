"""Dispatch/Result Adapter: hand the request to the generator, once."""

import logging

from ..core.collaborators import Generator
from ..core.models import CreationRequest, Project
from .errors import GenerationError

logger = logging.getLogger(__name__)


def dispatch(generator: Generator, request: CreationRequest, project: Project) -> str:
    """Call the generator and return its status message.

    Generation is not idempotent, so there is no retry. A missing or empty
    status message is treated as failure whatever else the generator did.

    Raises:
        GenerationError: The generator raised or reported no status message.
    """
    logger.info(
        "Dispatching %s %r to %s", request.type.value, request.name, type(generator).__name__
    )
    try:
        result = generator.create(
            name=request.name, meta_information=request, project=project
        )
    except Exception as e:
        logger.debug("Generator raised %s: %s", type(e).__name__, e)
        raise GenerationError() from e

    message = result.status_message if result is not None else None
    if not message:
        logger.debug("Generator returned no status message: %r", result)
        raise GenerationError()
    return message
