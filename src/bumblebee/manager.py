from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from typing_extensions import Self

from bumblebee.errors import TransformerNotSetError
from bumblebee.model.config_model import BumblebeeConfig
from bumblebee.model.include_model import IncludeSpec, ParsedIncludes
from bumblebee.model.resource_model import (CollectionResource, ItemResource, NullResource, Pagination, Resource,
                                            ResourceKind)
from bumblebee.model.transform_result_model import TransformResult
from bumblebee.resolution.request_includes import select_include_spec
from bumblebee.resolution.resolution_engine import resolve_resource
from bumblebee.resolution.resolution_scope_model import ResolutionScope
from bumblebee.serializer.base_serializer import SerializerStrategy
from bumblebee.serializer.serializer_registry import get_serializer

logger = logging.getLogger(__name__)


class Bumblebee:
    """
    Builder and entry point of a transformation.

    Select the data and its kind explicitly (`item`, `collection`,
    `paginate`, `null`), bind a transformer, optionally set includes, context,
    metadata and serializer, then await one of the output methods::

        output = await (Bumblebee.create()
                        .include("author,characters.actor")
                        .item(book)
                        .transform_with(BookTransformer)
                        .to_mapping())

    Each setter replaces the previous value, so a builder can be reused for
    several transformations.
    """

    def __init__(self, config: BumblebeeConfig | None = None) -> None:
        self._config = config or BumblebeeConfig()
        self._kind: ResourceKind = ResourceKind.NULL
        self._data: Any = None
        self._pagination: Pagination | None = None
        self._meta: dict[str, Any] | None = None
        self._transformer: Any = None
        self._variant: str | None = None
        self._includes: IncludeSpec = None
        self._context: Any = None
        self._serializer: str | SerializerStrategy = self._config.serializer

    @classmethod
    def create(cls, config: BumblebeeConfig | None = None) -> Bumblebee:
        return cls(config)

    @property
    def config(self) -> BumblebeeConfig:
        return self._config

    # ---- data selection ----

    def item(self, data: Any) -> Self:
        self._kind, self._data, self._pagination = ResourceKind.ITEM, data, None
        return self

    def collection(self, data: Iterable[Any]) -> Self:
        self._kind, self._data, self._pagination = ResourceKind.COLLECTION, data, None
        return self

    def null(self) -> Self:
        self._kind, self._data, self._pagination = ResourceKind.NULL, None, None
        return self

    def paginate(self, rows: Iterable[Any], *, total: int, per_page: int, page: int = 1) -> Self:
        """
        Selects one page of a larger collection.

        Args:
            rows (Iterable[Any]): The resources on this page.
            total (int): Number of resources across all pages.
            per_page (int): Page size.
            page (int): One-based number of this page. Defaults to 1.
        """
        rows = list(rows)
        self._kind, self._data = ResourceKind.COLLECTION, rows
        self._pagination = Pagination(total=total, count=len(rows), per_page=per_page, current_page=page)
        return self

    # ---- options ----

    def include(self, spec: IncludeSpec) -> Self:
        """
        Sets the includes to resolve: a comma-separated string such as
        "author,characters.actor", or a sequence of dotted names.

        An empty string or sequence includes nothing, even when request parsing
        is enabled. None clears the spec so the request is consulted again.
        """
        if spec is not None and not isinstance(spec, str):
            spec = list(spec)
        ParsedIncludes.parse(spec)
        self._includes = spec
        return self

    def meta(self, meta: Mapping[str, Any] | None) -> Self:
        self._meta = dict(meta) if meta else None
        return self

    def transform_with(self, transformer: Any, variant: str | None = None) -> Self:
        """
        Binds the transformer: a `TransformerAbstract` subclass or instance, a
        `module:Class[.variant]` import string, or a plain mapping function.
        """
        self._transformer, self._variant = transformer, variant
        return self

    def using_variant(self, variant: str | None) -> Self:
        self._variant = variant
        return self

    def with_context(self, context: Any) -> Self:
        self._context = context
        return self

    def set_serializer(self, serializer: str | SerializerStrategy) -> Self:
        get_serializer(serializer)
        self._serializer = serializer
        return self

    # ---- output ----

    def _build_resource(self) -> Resource:
        match self._kind:
            case ResourceKind.ITEM:
                return ItemResource(
                    data=self._data, transformer=self._transformer, variant=self._variant, meta=self._meta)
            case ResourceKind.COLLECTION:
                return CollectionResource(
                    data=self._data,
                    transformer=self._transformer,
                    variant=self._variant,
                    meta=self._meta,
                    pagination=self._pagination)
            case _:
                return NullResource(meta=self._meta)

    async def resolve(self) -> TransformResult:
        """
        Runs the transformation.

        Returns:
            TransformResult: The serialized output and how it was produced.

        Raises:
            TransformerNotSetError: If item or collection data is set but no
                transformer was bound.
            BumblebeeError: For malformed includes, unknown serializers or
                transformers declaring includes without handlers.
        """
        if self._kind != ResourceKind.NULL and self._data is not None and self._transformer is None:
            raise TransformerNotSetError(
                "No transformer bound; call transform_with() before producing output",
                context={"kind": self._kind.value})

        serializer = get_serializer(self._serializer)
        serializer_name = getattr(serializer, "name", type(serializer).__name__)
        spec = select_include_spec(self._includes, self._context, self._config)
        scope = ResolutionScope(
            includes=ParsedIncludes.parse(spec),
            serializer=serializer,
            context=self._context)
        resource = self._build_resource()
        logger.debug(
            "Transforming %s with %s, includes %r, serializer %r",
            resource.kind.value,
            getattr(self._transformer, "__name__", type(self._transformer).__name__),
            list(scope.includes),
            serializer_name)

        data = await resolve_resource(resource, scope)
        return TransformResult(kind=resource.kind, data=data, serializer=serializer_name)

    async def to_mapping(self) -> Any:
        """
        Runs the transformation and returns the serialized output as plain
        Python data: a dict for items, a list for plain collections.
        """
        return (await self.resolve()).to_mapping()

    async def to_json(self, *, indent: int | None = None) -> str:
        """
        Runs the transformation and returns the serialized output as JSON text.
        """
        return (await self.resolve()).to_json(indent=indent)
