from .config_model import BumblebeeConfig
from .include_model import IncludeSpec, ParsedIncludes, parse_includes
from .resource_model import (CollectionResource, ItemResource, NullResource, Pagination, PrimitiveResource,
                             Resource, ResourceKind)
from .transform_result_model import TransformResult

__all__ = [
    "BumblebeeConfig",
    "CollectionResource",
    "IncludeSpec",
    "ItemResource",
    "NullResource",
    "Pagination",
    "ParsedIncludes",
    "PrimitiveResource",
    "Resource",
    "ResourceKind",
    "TransformResult",
    "parse_includes"
]
