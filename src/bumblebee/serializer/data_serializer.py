from __future__ import annotations

from typing import Any

from bumblebee.serializer.base_serializer import SerializerStrategy


class DataSerializer(SerializerStrategy):
    """
    Wraps every item and collection, top-level and nested, in a `data` envelope::

        {"data": {"title": "...", "author": {"data": {"name": "..."}}}}
    """
    name = "data"
    precedence = 20

    def item(self, data: Any, *, nested: bool = False) -> Any:
        return {"data": data}

    def collection(self, data: list[Any], *, nested: bool = False) -> Any:
        return {"data": data}

    def null(self, *, nested: bool = False) -> Any:
        return {"data": None}


class SLDataSerializer(DataSerializer):
    """
    Wraps only the top level in a `data` envelope; nested includes stay plain::

        {"data": {"title": "...", "author": {"name": "..."}}}
    """
    name = "sl-data"
    precedence = 30

    def item(self, data: Any, *, nested: bool = False) -> Any:
        return data if nested else super().item(data)

    def collection(self, data: list[Any], *, nested: bool = False) -> Any:
        return data if nested else super().collection(data)

    def null(self, *, nested: bool = False) -> Any:
        return None if nested else super().null()
