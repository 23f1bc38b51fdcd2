from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from bumblebee.errors import InvalidIncludeError

IncludeSpec = str | Sequence[str] | None


@dataclass(slots=True, frozen=True)
class ParsedIncludes(Mapping[str, tuple[str, ...]]):
    """
    The parsed form of an include specification.

    Maps each requested top-level include name to the distinct dotted sub-paths
    requested beneath it, in first-seen order. An empty tuple means the include
    was requested without further nesting.

    `"author,characters.actor,characters.house"` parses to::

        {"author": (), "characters": ("actor", "house")}

    Attributes:
        paths (Mapping[str, tuple[str, ...]]): Read-only view of the parsed tree.
    """
    paths: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self.paths[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __repr__(self) -> str:
        return f"ParsedIncludes({dict(self.paths)!r})"

    @classmethod
    def parse(cls, spec: IncludeSpec) -> ParsedIncludes:
        """
        Parses a comma-separated string or a sequence of dotted strings.

        A string is split on commas first and then handled like the sequence
        form, so both spellings of the same request parse identically. Entries
        are stripped and empty entries are skipped. Each entry is split on its
        first dot: the head is the top-level include name and the tail, if any,
        is the sub-path forwarded when that include is resolved.

        Args:
            spec (IncludeSpec): The include specification. None, "" and [] all
                parse to an empty result.

        Returns:
            ParsedIncludes: The parsed include tree.

        Raises:
            InvalidIncludeError: If a sequence entry contains a comma, an entry is
                not a string, or a dotted path has an empty segment.
        """
        if not spec:
            return cls()

        if isinstance(spec, str):
            entries = spec.split(",")
        else:
            entries = []
            for entry in spec:
                if not isinstance(entry, str):
                    raise InvalidIncludeError(
                        f"include entries must be strings, got {type(entry).__name__}",
                        context={"entry": repr(entry)})
                if "," in entry:
                    raise InvalidIncludeError(
                        f"include entry {entry!r} contains a comma; pass it as separate entries",
                        context={"entry": entry})
                entries.append(entry)

        paths: dict[str, list[str]] = {}
        for raw in entries:
            entry = raw.strip()
            if not entry:
                continue
            segments = [segment.strip() for segment in entry.split(".")]
            if not all(segments):
                raise InvalidIncludeError(
                    f"include path {entry!r} has an empty segment",
                    context={"entry": entry})
            head, tail = segments[0], ".".join(segments[1:])
            tails = paths.setdefault(head, [])
            if tail and tail not in tails:
                tails.append(tail)

        return cls(MappingProxyType({name: tuple(tails) for name, tails in paths.items()}))

    def subpath(self, *names: str) -> str:
        """
        Returns the comma-joined sub-paths requested beneath the given top-level names.
        """
        tails: list[str] = []
        for name in names:
            for tail in self.paths.get(name, ()):
                if tail not in tails:
                    tails.append(tail)
        return ",".join(tails)

    def sub_includes(self, *names: str) -> ParsedIncludes:
        """
        Returns the includes to resolve one level down, beneath the given names.

        Several names are accepted because different spellings of the same
        declared include (`authorName`, `author_name`) may each carry tails.
        """
        return ParsedIncludes.parse(self.subpath(*names))

    def to_mapping(self) -> dict[str, Any]:
        return {name: list(tails) for name, tails in self.paths.items()}


def parse_includes(spec: IncludeSpec) -> ParsedIncludes:
    return ParsedIncludes.parse(spec)
