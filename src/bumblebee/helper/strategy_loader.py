from __future__ import annotations

import importlib
import inspect
import pkgutil
from importlib.metadata import entry_points


def _builtin_strategy_classes(base: type, package_name: str) -> list[type]:
    """
    Discovers concrete subclasses of a base class in the modules of a package.

    Abstract classes and the base class itself are skipped.

    Args:
        base (type): The base class to check against.
        package_name (str): The name of the package to search for subclasses.

    Returns:
        list[type]: The discovered classes, in module walk order.
    """
    package = importlib.import_module(package_name)
    classes: list[type] = []

    for _finder, mod_name, _ispkg in pkgutil.walk_packages(
            package.__path__, package.__name__ + "."):
        module = importlib.import_module(mod_name)

        for obj in vars(module).values():
            if not inspect.isclass(obj) or obj is base:
                continue
            if not issubclass(obj, base) or inspect.isabstract(obj):
                continue
            if obj.__module__ != module.__name__:
                # imported into this module, picked up where it is defined
                continue
            classes.append(obj)

    return classes


def _entrypoint_strategy_classes(base: type, group: str) -> list[type]:
    """
    Loads classes from the entry points of a group, keeping only subclasses of
    the base class.

    Args:
        base (type): The base class that the discovered classes must subclass.
        group (str): The name of the entry point group to search within.

    Returns:
        list[type]: The classes found in the entry point group.
    """
    classes: list[type] = []

    for ep in entry_points().select(group=group):
        obj = ep.load()
        if not inspect.isclass(obj) or not issubclass(obj, base):
            continue
        classes.append(obj)

    return classes


def load_strategy_classes(*, base: type, package_name: str, entrypoint_group: str) -> dict[str, type]:
    """
    Loads built-in and entry point strategy classes keyed by their `name`.

    Classes are ranked by their `precedence` attribute (lower first, default 100)
    and then by name. When two classes share a name, the one with the lower
    precedence wins, so an entry point can only replace a built-in by declaring a
    precedence lower than the built-in's.

    Args:
        base: The base type that all strategy classes must inherit from.
        package_name: The name of the package to search for built-in strategies.
        entrypoint_group: The entry point group to search for plug-in strategies.

    Returns:
        dict[str, type]: Strategy classes keyed by name, in ranked order.
    """
    classes = (
            _builtin_strategy_classes(base, package_name) +
            _entrypoint_strategy_classes(base, entrypoint_group))

    ranked: list[tuple[int, str, type]] = []
    for cls in classes:
        name = getattr(cls, "name", None) or cls.__name__
        prec = getattr(cls, "precedence", 100)
        ranked.append((prec, name, cls))
    ranked.sort(key=lambda t: (t[0], t[1]))

    by_name: dict[str, type] = {}
    for _prec, name, cls in ranked:
        by_name.setdefault(name, cls)
    return by_name
