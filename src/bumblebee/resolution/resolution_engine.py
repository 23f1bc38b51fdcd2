from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Mapping
from typing import Any

from bumblebee.errors import InvalidIncludeError
from bumblebee.model.include_model import ParsedIncludes
from bumblebee.model.resource_model import CollectionResource, Resource, ResourceKind, as_resource
from bumblebee.resolution.name_matcher import handler_name, select_requested, snake_case
from bumblebee.resolution.resolution_context_vars import current_resolution_scope
from bumblebee.resolution.resolution_scope_model import ResolutionScope
from bumblebee.transformer.transformer_abstract import TransformerAbstract
from bumblebee.transformer.transformer_loader import LoadedTransformer, load_transformer

logger = logging.getLogger(__name__)


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def resolve_resource(resource: Resource, scope: ResolutionScope) -> Any:
    """
    Resolves a directive and shapes the result with the scope's serializer.

    Items and collections are resolved through their transformer (or mapper)
    with the includes of `scope`; an item or collection whose data is None is
    shaped as null. Primitive values are returned as-is, without serialization.

    Args:
        resource (Resource): The directive to resolve.
        scope (ResolutionScope): The scope of the level being resolved.

    Returns:
        Any: The serialized result.
    """
    kind = resource.kind
    if kind == ResourceKind.PRIMITIVE:
        return resource.data
    if resource.data is None:
        kind = ResourceKind.NULL

    pagination = resource.pagination if isinstance(resource, CollectionResource) else None
    match kind:
        case ResourceKind.ITEM:
            loaded = load_transformer(resource.transformer, resource.variant)
            data = await resolve_item(loaded, resource.data, scope)
        case ResourceKind.COLLECTION:
            loaded = load_transformer(resource.transformer, resource.variant)
            data = await resolve_collection(loaded, resource.data, scope)
        case _:
            data = None

    return scope.serializer.serialize(
        kind, data, nested=scope.nested, meta=resource.meta, pagination=pagination)


async def resolve_collection(loaded: LoadedTransformer, items: Any, scope: ResolutionScope) -> list[Any]:
    """
    Resolves every element of a collection with the same transformer.

    Elements are resolved as concurrent tasks and returned in input order,
    regardless of completion order. If an element fails, the remaining tasks
    are cancelled and the element's exception propagates unchanged.

    Args:
        loaded (LoadedTransformer): The transformer applied to each element.
        items (Any): An iterable of resources.
        scope (ResolutionScope): The scope shared by all elements.

    Returns:
        list[Any]: One resolved value per element.
    """
    tasks = [asyncio.ensure_future(resolve_item(loaded, item, scope)) for item in items]
    if not tasks:
        return []
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        # reap cancelled siblings
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


async def resolve_item(loaded: LoadedTransformer, resource: Any, scope: ResolutionScope) -> Any:
    """
    Resolves one resource: runs the transform, resolves the matched includes,
    and merges them into the transform output.

    Primary fields win over includes of the same name. Output that is not a
    mapping is returned as produced, without includes.

    Args:
        loaded (LoadedTransformer): The transformer or mapper to apply.
        resource (Any): The resource.
        scope (ResolutionScope): The scope of this level.

    Returns:
        Any: The resolved node.
    """
    if loaded.transformer is None:
        if loaded.mapper is None:
            return resource
        return await _maybe_await(loaded.mapper(resource))

    transformer = loaded.transformer
    token = current_resolution_scope.set(scope)
    try:
        if loaded.variant:
            base = await _maybe_await(transformer.transform_variant(resource, loaded.variant))
        else:
            base = await _maybe_await(transformer.transform(resource))

        if not isinstance(base, Mapping):
            return base

        included = await resolve_includes(transformer, resource, scope)
        result = dict(base)
        for name, value in included.items():
            if name in result:
                logger.debug(
                    "Include %r of %s discarded; the transform already sets %r",
                    name, type(transformer).__name__, name)
                continue
            result[name] = value
        return result
    finally:
        current_resolution_scope.reset(token)


def match_includes(transformer: TransformerAbstract, includes: ParsedIncludes) -> dict[str, list[str]]:
    """
    Decides which declared includes of a transformer to resolve.

    Default includes always resolve; available includes resolve when a
    requested name matches them. The result is in declaration order, default
    includes first, and maps each declared name to the requested spellings that
    selected it (empty for an unrequested default include).

    Args:
        transformer (TransformerAbstract): The transformer declaring includes.
        includes (ParsedIncludes): The includes requested at this level.

    Returns:
        dict[str, list[str]]: Declared include name to matching requested names.

    Raises:
        InvalidIncludeError: If two declared names share one handler.
    """
    requested = list(includes)
    matched: dict[str, list[str]] = {}

    defaults = transformer.get_default_includes()
    for name in defaults:
        matched.setdefault(name, select_requested(name, requested))

    if requested:
        default_keys = {snake_case(name): name for name in defaults}
        for name in transformer.get_available_includes():
            if name in matched:
                continue
            other = default_keys.get(snake_case(name))
            if other is not None:
                raise InvalidIncludeError(
                    f"{type(transformer).__qualname__} declares both {other!r} and {name!r}; "
                    f"both are handled by {handler_name(name)}()",
                    context={"transformer": type(transformer).__qualname__, "include": name, "conflicts_with": other})
            keys = select_requested(name, requested)
            if keys:
                matched[name] = keys

    if logger.isEnabledFor(logging.DEBUG):
        used = {key for keys in matched.values() for key in keys}
        ignored = [name for name in requested if name not in used]
        if ignored:
            logger.debug(
                "%s does not declare requested includes: %s",
                type(transformer).__name__, ", ".join(ignored))

    return matched


async def resolve_includes(
        transformer: TransformerAbstract,
        resource: Any,
        scope: ResolutionScope) -> dict[str, Any]:
    """
    Invokes the handlers of the matched includes, in declaration order, and
    resolves what they return one level down.

    Handlers of one node run one after another so the merge order never
    depends on completion order.

    Raises:
        MissingIncludeHandlerError: If a matched include has no handler.
    """
    resolved: dict[str, Any] = {}
    for name, keys in match_includes(transformer, scope.includes).items():
        handler = transformer.handler_for(name)
        child = scope.child(name, scope.includes.sub_includes(*keys))
        logger.debug(
            "Resolving include %r of %s with sub-includes %r",
            child.identifier, type(transformer).__name__, list(child.includes))
        value = await _maybe_await(handler(resource))
        resolved[name] = await resolve_resource(as_resource(value), child)
    return resolved
