from __future__ import annotations

import importlib
import inspect
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from bumblebee.errors import InvalidTransformerError
from bumblebee.transformer.transformer_abstract import TransformerAbstract


@dataclass(slots=True, frozen=True)
class LoadedTransformer:
    """
    A transformer ready to be applied to resources.

    Exactly one of `transformer` and `mapper` is set, unless both are None, in
    which case resources pass through unchanged.

    Attributes:
        transformer (TransformerAbstract | None): The transformer instance.
        mapper (Callable[[Any], Any] | None): A plain function mapping a resource
            to its output.
        variant (str | None): The transform variant to run.
    """
    transformer: TransformerAbstract | None = None
    mapper: Callable[[Any], Any] | None = None
    variant: str | None = None


def import_transformer(target: str) -> tuple[Any, str | None]:
    """
    Imports a transformer from a `module:Class` string.

    A trailing `.variant` after the class name selects a transform variant, as
    in `myapp.transformers:BookTransformer.summary`.

    Args:
        target (str): The import string.

    Returns:
        tuple[Any, str | None]: The imported object and the variant, if any.

    Raises:
        InvalidTransformerError: If the string is malformed or does not resolve.
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise InvalidTransformerError(
            f"transformer import string must look like 'module:Class', got {target!r}",
            context={"target": target})
    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise InvalidTransformerError(
            f"cannot import transformer module {module_name!r}: {e}",
            context={"target": target}) from e

    parts = attr_path.split(".")
    for index, part in enumerate(parts):
        if inspect.isclass(obj) and issubclass(obj, TransformerAbstract):
            # whatever remains names a variant
            variant = ".".join(parts[index:])
            if "." in variant:
                break
            return obj, variant
        if not hasattr(obj, part):
            break
        obj = getattr(obj, part)
    else:
        return obj, None

    raise InvalidTransformerError(
        f"cannot resolve transformer {target!r}",
        context={"target": target})


def load_transformer(transformer: Any, variant: str | None = None) -> LoadedTransformer:
    """
    Turns anything accepted as a transformer into a `LoadedTransformer`.

    Accepted values: a `TransformerAbstract` subclass (instantiated without
    arguments), a `TransformerAbstract` instance, a `module:Class[.variant]`
    import string, a plain callable used as a mapper, or None (identity).

    Args:
        transformer (Any): The transformer designation.
        variant (str | None): An explicit variant; wins over one named in an
            import string.

    Returns:
        LoadedTransformer: The loaded transformer.

    Raises:
        InvalidTransformerError: If the value cannot be used as a transformer.
    """
    if transformer is None:
        return LoadedTransformer(variant=variant)

    if isinstance(transformer, str):
        transformer, imported_variant = import_transformer(transformer)
        variant = variant or imported_variant

    if inspect.isclass(transformer):
        if not issubclass(transformer, TransformerAbstract):
            raise InvalidTransformerError(
                f"{transformer.__qualname__} is not a TransformerAbstract subclass",
                context={"transformer": transformer.__qualname__})
        return LoadedTransformer(transformer=transformer(), variant=variant)

    if isinstance(transformer, TransformerAbstract):
        return LoadedTransformer(transformer=transformer, variant=variant)

    if callable(transformer):
        if variant:
            raise InvalidTransformerError(
                "a variant can only be used with a TransformerAbstract",
                context={"variant": variant})
        return LoadedTransformer(mapper=transformer)

    raise InvalidTransformerError(
        f"cannot use {type(transformer).__name__} as a transformer",
        context={"transformer": repr(transformer)})
