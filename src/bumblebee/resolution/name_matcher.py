from __future__ import annotations

import re
from collections.abc import Iterable

from cachetools import LRUCache, cached

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[_\-]")


@cached(cache=LRUCache(maxsize=1024))
def canonical_name(name: str) -> str:
    """
    Reduces an include name to its lower-case, separator-stripped form.

    `authorName`, `author_name` and `author-name` all reduce to `authorname`.

    Args:
        name (str): The include name.

    Returns:
        str: The canonical form of the name.
    """
    return _SEPARATORS.sub("", name).lower()


@cached(cache=LRUCache(maxsize=1024))
def snake_case(name: str) -> str:
    """
    Converts a camelCase, kebab-case or snake_case name to snake_case.

    Args:
        name (str): The name to convert.

    Returns:
        str: The snake_case spelling, e.g. `authorName` -> `author_name`.
    """
    return _CAMEL_BOUNDARY.sub("_", name).replace("-", "_").lower()


def is_snake_case(name: str) -> bool:
    return "_" in name


def matches(declared: str, requested: str) -> bool:
    """
    Decides whether a requested include name refers to a declared include.

    The declared name is the source of truth for which spellings it accepts:
    a snake_case declaration only accepts its own spelling (ignoring case), so
    a camelCase request never matches it. Any other declaration accepts every
    spelling with the same canonical form, so `authorName` accepts both
    `authorName` and `author_name`.

    Args:
        declared (str): The include name declared by a transformer.
        requested (str): The include name requested by the caller.

    Returns:
        bool: True if the request selects the declared include.
    """
    if is_snake_case(declared):
        return requested.lower() == declared.lower()
    return canonical_name(requested) == canonical_name(declared)


def select_requested(declared: str, requested_names: Iterable[str]) -> list[str]:
    """
    Returns every requested spelling that selects the declared include, in
    request order. Empty when the include was not requested.
    """
    return [requested for requested in requested_names if matches(declared, requested)]


def handler_name(declared: str) -> str:
    """
    Returns the conventional handler method name for a declared include.

    Args:
        declared (str): The declared include name.

    Returns:
        str: `include_` followed by the snake_case spelling of the name, so
            `authorName` and `author_name` both give `include_author_name`.
    """
    return f"include_{snake_case(declared)}"
