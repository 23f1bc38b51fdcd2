from __future__ import annotations

from typing import Any, Mapping


class BumblebeeError(Exception):
    """Base exception for bumblebee."""

    context: dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.context = dict(context) if context is not None else {}

    def to_json_error(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class InvalidIncludeError(BumblebeeError, ValueError):
    """Raised for a malformed include specification or declared include name."""


class MissingIncludeHandlerError(BumblebeeError, LookupError):
    """Raised when a transformer declares an include it has no handler for."""


class UnknownSerializerError(BumblebeeError, LookupError):
    """Raised when a serializer name is not registered."""


class TransformerNotSetError(BumblebeeError, RuntimeError):
    """Raised when a resource is resolved before a transformer was bound."""


class InvalidTransformerError(BumblebeeError, TypeError):
    """Raised when an object cannot be used as a transformer."""
