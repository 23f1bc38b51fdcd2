from __future__ import annotations

import inspect
import logging

from bumblebee.errors import UnknownSerializerError
from bumblebee.helper.strategy_loader import load_strategy_classes
from bumblebee.serializer.base_serializer import SerializerStrategy

ENTRYPOINT_GROUP = "bumblebee.serializers"
PACKAGE_NAME = __name__.rsplit(".", 1)[0]

logger = logging.getLogger(__name__)

# name -> serializer class, or a registered instance
_SERIALIZER_REGISTRY: dict[str, type[SerializerStrategy] | SerializerStrategy] = {}
_builtins_loaded = False


def _ensure_loaded() -> None:
    """
    Populates the registry with the built-in and entry point serializers once.
    Explicit registrations made before the first lookup are kept.
    """
    global _builtins_loaded
    if _builtins_loaded:
        return
    discovered = load_strategy_classes(
        base=SerializerStrategy,
        package_name=PACKAGE_NAME,
        entrypoint_group=ENTRYPOINT_GROUP)
    for name, cls in discovered.items():
        _SERIALIZER_REGISTRY.setdefault(name, cls)
    _builtins_loaded = True
    logger.debug("Loaded serializers: %s", ", ".join(sorted(_SERIALIZER_REGISTRY)))


def register_serializer(
        serializer: type[SerializerStrategy] | SerializerStrategy,
        name: str | None = None) -> None:
    """
    Registers a custom serializer, replacing any serializer of the same name.

    Args:
        serializer: A `SerializerStrategy` subclass or instance.
        name: The name to register under. Defaults to the serializer's `name`.

    Raises:
        TypeError: If the object is not a `SerializerStrategy`.
        ValueError: If no name is given and the serializer declares none.
    """
    cls = serializer if inspect.isclass(serializer) else type(serializer)
    if not issubclass(cls, SerializerStrategy):
        raise TypeError(f"{cls.__name__} is not a SerializerStrategy")
    key = name or getattr(serializer, "name", None)
    if not key:
        raise ValueError(f"{cls.__name__} has no name to register under")
    _ensure_loaded()
    _SERIALIZER_REGISTRY[key] = serializer
    logger.debug("Registered serializer %r -> %s", key, cls.__qualname__)


def unregister_serializer(name: str) -> None:
    _SERIALIZER_REGISTRY.pop(name, None)


def get_serializer(serializer: str | SerializerStrategy) -> SerializerStrategy:
    """
    Resolves a serializer by name, passing instances through unchanged.

    Args:
        serializer: A registered serializer name, or a serializer instance.

    Returns:
        SerializerStrategy: The serializer instance.

    Raises:
        UnknownSerializerError: If no serializer is registered under the name.
    """
    if isinstance(serializer, SerializerStrategy):
        return serializer
    _ensure_loaded()
    entry = _SERIALIZER_REGISTRY.get(serializer)
    if entry is None:
        raise UnknownSerializerError(
            f"Unknown serializer: {serializer!r}",
            context={"serializer": serializer, "available": sorted(_SERIALIZER_REGISTRY)})
    return entry() if inspect.isclass(entry) else entry


def get_serializer_registry() -> dict[str, type[SerializerStrategy] | SerializerStrategy]:
    _ensure_loaded()
    # shallow copy to avoid outside mutation
    return dict(_SERIALIZER_REGISTRY)
