from importlib.metadata import PackageNotFoundError, version

from .errors import (BumblebeeError, InvalidIncludeError, InvalidTransformerError, MissingIncludeHandlerError,
                     TransformerNotSetError, UnknownSerializerError)
from .manager import Bumblebee
from .model import BumblebeeConfig, Pagination, ParsedIncludes, ResourceKind, TransformResult, parse_includes
from .serializer.base_serializer import SerializerStrategy
from .serializer.serializer_registry import get_serializer, register_serializer
from .transformer.transformer_abstract import TransformerAbstract, include_handler

try:
    __version__ = version("pybumblebee")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "Bumblebee",
    "BumblebeeConfig",
    "BumblebeeError",
    "InvalidIncludeError",
    "InvalidTransformerError",
    "MissingIncludeHandlerError",
    "Pagination",
    "ParsedIncludes",
    "ResourceKind",
    "SerializerStrategy",
    "TransformResult",
    "TransformerAbstract",
    "TransformerNotSetError",
    "UnknownSerializerError",
    "get_serializer",
    "include_handler",
    "parse_includes",
    "register_serializer"
]
