from __future__ import annotations

from typing import Any

from bumblebee.serializer.base_serializer import SerializerStrategy


class PlainSerializer(SerializerStrategy):
    """
    Returns resolved data unchanged: items as objects, collections as lists.
    """
    name = "plain"
    precedence = 10

    def item(self, data: Any, *, nested: bool = False) -> Any:
        return data

    def collection(self, data: list[Any], *, nested: bool = False) -> Any:
        return data
