from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from bumblebee.helper.multiformat_serializable_mixin import MultiformatSerializableMixin
from bumblebee.model.resource_model import ResourceKind


@dataclass(slots=True, frozen=True, kw_only=True)
class TransformResult(MultiformatSerializableMixin):
    """
    The serialized output of one transformation call.

    Attributes:
        kind (ResourceKind): Whether the top-level data was an item, a collection
            or null.
        data (Any): The serialized output tree.
        serializer (str): Name of the serializer that shaped the output.
    """
    kind: ResourceKind
    data: Any
    serializer: str

    def to_mapping(self) -> Any:
        return self.data
