from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, ClassVar

from bumblebee.model.resource_model import Pagination, ResourceKind


class SerializerStrategy(ABC):
    """
    Shapes resolved data into its final output envelope.

    A serializer is pure and stateless. The manager invokes it once for the
    top-level result, and the resolution engine invokes it for every nested
    item, collection and null include, with `nested=True`, so nested relations
    are reshaped the same way as the top level.

    Attributes:
        name (str): The name the serializer is selected by.
        precedence (int): Rank used when two serializers claim the same name.
            Lower values win.
    """

    name: ClassVar[str]
    precedence: ClassVar[int] = 100

    @abstractmethod
    def item(self, data: Any, *, nested: bool = False) -> Any:
        """
        Shapes one resolved item.

        Args:
            data (Any): The resolved node, usually a dict.
            nested (bool): True when the item is an include of another node.

        Returns:
            Any: The shaped output.
        """
        raise NotImplementedError

    @abstractmethod
    def collection(self, data: list[Any], *, nested: bool = False) -> Any:
        """
        Shapes an ordered list of resolved items.

        Args:
            data (list[Any]): The resolved nodes, in input order.
            nested (bool): True when the collection is an include of another node.

        Returns:
            Any: The shaped output.
        """
        raise NotImplementedError

    def null(self, *, nested: bool = False) -> Any:
        return None

    def meta(self, output: Any, meta: Mapping[str, Any]) -> Any:
        """
        Attaches metadata under a `meta` key.

        A non-mapping output (a plain list, for example) is first moved under a
        `data` key so the metadata has somewhere to live.
        """
        return self._attach(output, "meta", dict(meta))

    def paginate(self, output: Any, pagination: Pagination) -> Any:
        """
        Attaches pagination metadata under a `pagination` key.
        """
        return self._attach(output, "pagination", pagination.to_mapping())

    def serialize(
            self,
            kind: ResourceKind,
            data: Any,
            *,
            nested: bool = False,
            meta: Mapping[str, Any] | None = None,
            pagination: Pagination | None = None) -> Any:
        """
        Shapes resolved data according to its resource kind.

        Args:
            kind (ResourceKind): The kind of resource the data was resolved from.
            data (Any): The resolved data.
            nested (bool): True when shaping an include of another node.
            meta (Mapping[str, Any] | None): Optional metadata to attach.
            pagination (Pagination | None): Optional pagination to attach.

        Returns:
            Any: The shaped output.
        """
        match kind:
            case ResourceKind.ITEM:
                output = self.item(data, nested=nested)
            case ResourceKind.COLLECTION:
                output = self.collection(data, nested=nested)
            case ResourceKind.NULL:
                output = self.null(nested=nested)
            case _:
                output = data

        if pagination is not None:
            output = self.paginate(output, pagination)
        if meta:
            output = self.meta(output, meta)
        return output

    @staticmethod
    def _attach(output: Any, key: str, value: Any) -> Any:
        if isinstance(output, Mapping):
            return {**output, key: value}
        return {"data": output, key: value}
