from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from bumblebee.model.include_model import ParsedIncludes
from bumblebee.serializer.base_serializer import SerializerStrategy


@dataclass(slots=True, frozen=True, kw_only=True)
class ResolutionScope:
    """
    The per-call state of one level of a resolution tree walk.

    A new scope is derived for every nested include, so each level sees only
    the includes requested beneath it.

    Attributes:
        includes (ParsedIncludes): The includes requested at this level.
        serializer (SerializerStrategy): The serializer shaping the output.
        context (Any): The ambient context bound to the call, if any.
        path (tuple[str, ...]): The declared include names leading to this level;
            empty at the top.
    """
    includes: ParsedIncludes = field(default_factory=ParsedIncludes)
    serializer: SerializerStrategy
    context: Any = None
    path: tuple[str, ...] = ()

    @property
    def identifier(self) -> str:
        """
        The dotted include path of this level, e.g. "characters.actor".
        """
        return ".".join(self.path)

    @property
    def nested(self) -> bool:
        return bool(self.path)

    def child(self, name: str, includes: ParsedIncludes) -> ResolutionScope:
        return replace(self, includes=includes, path=(*self.path, name))
