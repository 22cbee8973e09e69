"""Generators that receive built creation requests.

load_generator resolves a "package.module:attribute" reference from config.
The attribute may be a Generator subclass (instantiated without arguments)
or a ready-made generator instance.
"""

import importlib
import logging

from ..core.collaborators import Generator
from .preview import PreviewGenerator, describe_request

logger = logging.getLogger(__name__)


def load_generator(target: str = "") -> Generator:
    """Load the configured generator, or the preview generator if target is empty.

    Raises:
        ValueError: If target cannot be imported or is not a generator.
    """
    if not target:
        return PreviewGenerator()

    module_name, _, attr = target.partition(":")
    if not module_name or not attr:
        raise ValueError(
            f"Invalid generator reference: {target!r}. "
            "Expected format: 'package.module:attribute'"
        )
    try:
        module = importlib.import_module(module_name)
        obj = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ValueError(f"Cannot load generator {target!r}: {e}") from e

    if isinstance(obj, type):
        obj = obj()
    if not callable(getattr(obj, "create", None)):
        raise ValueError(f"{target!r} has no create() method")
    logger.debug("Loaded generator %s", target)
    return obj


__all__ = ["PreviewGenerator", "describe_request", "load_generator"]
