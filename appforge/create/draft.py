"""Incremental, provenance-tagged draft of a creation request.

Every field is a Slot that is either pending (still to be resolved) or holds
a value together with where it came from. Argument parsing fills slots from
argv, the interactive resolver fills pending slots from answers, and the
builder defaults whatever is left. The built CreationRequest carries plain
values only.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from ..core.models import ArtifactType, CreateArgs
from .errors import UnknownArtifactTypeError


class Source(str, Enum):
    ARGV = "argv"
    PROMPT = "prompt"
    DEFAULT = "default"


@dataclass(frozen=True)
class Slot:
    value: Any = None
    source: Source | None = None

    @property
    def pending(self) -> bool:
        return self.source is None

    @classmethod
    def of(cls, value: Any, source: Source = Source.ARGV) -> "Slot":
        """A resolved slot, or a pending one when value was not supplied."""
        if value is None:
            return cls()
        return cls(value, source)


@dataclass(frozen=True)
class CreationDraft:
    """One slot per CreationRequest field (save_path is derived, not drafted).

    namespaces and modules hold raw strings while they come from argv and
    KnownIdentifier lists once validated or answered.
    """

    type: Slot = field(default_factory=Slot)
    name: Slot = field(default_factory=Slot)
    controller: Slot = field(default_factory=Slot)
    root_view: Slot = field(default_factory=Slot)
    route: Slot = field(default_factory=Slot)
    theme: Slot = field(default_factory=Slot)
    namespaces: Slot = field(default_factory=Slot)
    modules: Slot = field(default_factory=Slot)

    @classmethod
    def from_args(cls, args: CreateArgs) -> "CreationDraft":
        """Fill slots from command-line arguments.

        Raises:
            UnknownArtifactTypeError: If the artifact token is outside the closed set.
        """
        artifact = None
        if args.artifact:
            try:
                artifact = ArtifactType.parse(args.artifact)
            except ValueError:
                raise UnknownArtifactTypeError(args.artifact) from None

        return cls(
            type=Slot.of(artifact),
            name=Slot.of(args.name or None),
            controller=Slot.of(args.controller),
            root_view=Slot.of(args.root),
            route=Slot.of(args.route),
            theme=Slot.of(args.theme or None),
            namespaces=Slot.of(_split_list(args.namespaces)),
            modules=Slot.of(_split_list(args.modules)),
        )

    @property
    def artifact(self) -> ArtifactType | None:
        return self.type.value

    def value(self, name: str) -> Any:
        return getattr(self, name).value

    def is_pending(self, name: str) -> bool:
        return getattr(self, name).pending

    def resolve(self, name: str, value: Any, source: Source) -> "CreationDraft":
        """Return a copy with slot name resolved to value."""
        return replace(self, **{name: Slot(value, source)})

    def provenance(self) -> dict[str, str | None]:
        """Field name -> source, for logging and debugging."""
        result: dict[str, str | None] = {}
        for f in fields(self):
            slot = getattr(self, f.name)
            result[f.name] = None if slot.pending else slot.source.value
        return result


def _split_list(values: list[str] | None) -> list[str] | None:
    """Flatten repeated and comma-separated list options.

    None stays None (not supplied); ["a,b", "c"] becomes ["a", "b", "c"].
    """
    if values is None:
        return None
    return [part.strip() for value in values for part in value.split(",") if part.strip()]
