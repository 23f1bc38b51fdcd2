from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from math import ceil
from typing import Any

from bumblebee.helper.multiformat_serializable_mixin import MultiformatSerializableMixin


class ResourceKind(str, Enum):
    """
    The kinds of resource a transformation can produce.

    Attributes:
        ITEM (str): A single resource resolved through a transformer or mapper.
        COLLECTION (str): An ordered sequence of resources, each resolved the same way.
        NULL (str): An absent resource. Always resolves to None.
        PRIMITIVE (str): A literal value merged as-is, with no further resolution.
    """
    ITEM = "item"
    COLLECTION = "collection"
    NULL = "null"
    PRIMITIVE = "primitive"


@dataclass(slots=True, frozen=True, kw_only=True)
class Pagination(MultiformatSerializableMixin):
    """
    Pagination metadata for a page of a larger collection.

    Attributes:
        total (int): Number of resources across all pages.
        count (int): Number of resources on this page.
        per_page (int): Page size.
        current_page (int): One-based number of this page.
    """
    total: int
    count: int
    per_page: int
    current_page: int

    def __post_init__(self):
        if self.per_page < 1:
            raise ValueError("Pagination.per_page must be at least 1")
        if self.current_page < 1:
            raise ValueError("Pagination.current_page must be at least 1")
        if self.total < 0 or self.count < 0:
            raise ValueError("Pagination.total and Pagination.count must not be negative")

    @property
    def total_pages(self) -> int:
        return max(1, ceil(self.total / self.per_page))

    def to_mapping(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "count": self.count,
            "per_page": self.per_page,
            "current_page": self.current_page,
            "total_pages": self.total_pages,
        }


@dataclass(slots=True, frozen=True, kw_only=True)
class Resource:
    """
    A resolution directive: what to resolve and how.

    Include handlers return one of the concrete subclasses (usually through
    `TransformerAbstract.item`, `collection` or `null`), and the manager builds
    one for the top-level data. Any other value returned by a handler is wrapped
    in a `PrimitiveResource`.

    Attributes:
        data (Any): The resource (or sequence of resources) to resolve.
        transformer (Any): A transformer class, instance, import string or a
            plain mapping function. None for null and primitive resources.
        variant (str | None): Optional transform variant of the transformer.
        meta (Mapping[str, Any] | None): Metadata handed to the serializer.
    """
    kind: ResourceKind = field(init=False)
    data: Any = None
    transformer: Any = None
    variant: str | None = None
    meta: Mapping[str, Any] | None = None


@dataclass(slots=True, frozen=True, kw_only=True)
class ItemResource(Resource):
    kind: ResourceKind = field(init=False, default=ResourceKind.ITEM)


@dataclass(slots=True, frozen=True, kw_only=True)
class CollectionResource(Resource):
    """
    A collection directive. `pagination`, when set, describes the page the
    data belongs to.
    """
    kind: ResourceKind = field(init=False, default=ResourceKind.COLLECTION)
    pagination: Pagination | None = None

    def __post_init__(self):
        if self.data is None:
            return
        if isinstance(self.data, (str, bytes, Mapping)) or not isinstance(self.data, Iterable):
            raise TypeError(
                f"collection data must be an iterable of resources, got {type(self.data).__name__}")


@dataclass(slots=True, frozen=True, kw_only=True)
class NullResource(Resource):
    kind: ResourceKind = field(init=False, default=ResourceKind.NULL)


@dataclass(slots=True, frozen=True, kw_only=True)
class PrimitiveResource(Resource):
    kind: ResourceKind = field(init=False, default=ResourceKind.PRIMITIVE)


def as_resource(value: Any) -> Resource:
    """
    Returns the value unchanged if it is already a directive, otherwise wraps it
    as a primitive merge value.
    """
    if isinstance(value, Resource):
        return value
    return PrimitiveResource(data=value)
