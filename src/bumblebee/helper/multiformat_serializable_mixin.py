from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, date
from enum import Enum
from pathlib import Path
from typing import Any

from bumblebee.helper.toml_utils import dump_toml_to_str


def normalize_value(value: Any) -> Any:
    """
    Normalizes Python objects into values every supported text format can encode.

    Unlike a canonicalizing normalizer, mapping key order is preserved: the
    order of keys in a transformed node is part of its output.

    Args:
        value (Any): The value to normalize. Nested mappings and sequences are
            processed recursively.

    Returns:
        Any: The normalized form of the input value:
            - A POSIX string for Path types.
            - The stored value for Enum types.
            - An ISO 8601 string for dates and datetimes.
            - A dict with stringified keys for Mapping types.
            - A sorted list for sets and frozensets.
            - A list for list or tuple input.
            - The original value for anything else.
    """
    match value:
        case Path():
            return value.as_posix()

        case Enum():
            return value.value

        case datetime() | date():
            return value.isoformat()

        case Mapping():
            return {str(k): normalize_value(v) for k, v in value.items()}

        case set() | frozenset():
            return sorted(normalize_value(v) for v in value)

        case list() | tuple():
            return [normalize_value(v) for v in value]

        case _:
            return value


class MultiformatSerializableMixin:
    """
    A mixin to add multi-format serialization support for output objects.

    Subclasses implement `to_mapping`, which returns the plain structured value
    (a mapping, a list of mappings, a primitive or None). The mixin encodes that
    value as JSON, YAML or, for mapping values, TOML.
    """

    def to_mapping(self, *args, **kwargs) -> Any:
        """
        Converts the object into its plain structured value.

        Raises:
            NotImplementedError: Raised when subclasses do not implement this
                method.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement to_mapping() "
            "to use MultiformatSerializableMixin serialization.")

    def to_json(self, *, indent: int | None = None, sort_keys: bool = False) -> str:
        """
        Converts the object's data to a JSON string.

        Non-ASCII characters are preserved. Keys keep their resolution order
        unless `sort_keys` is set.

        Args:
            indent (int | None): Number of spaces to indent nested values, or None
                for compact output. Defaults to None.
            sort_keys (bool): Whether to sort mapping keys. Defaults to False.

        Returns:
            str: A string containing the JSON representation of the object's data.
        """
        import json
        return json.dumps(
            normalize_value(self.to_mapping()),
            ensure_ascii=False,
            indent=indent,
            sort_keys=sort_keys)

    def to_yaml(self, *, indent: int = 2) -> str:
        """
        Converts the object's data to a YAML string representation.

        Args:
            indent (int): The number of spaces to use for indentation in the
                YAML output. Defaults to 2.

        Returns:
            str: The YAML string representation of the object's data.

        Raises:
            RuntimeError: If the PyYAML library is not installed on the system.
        """
        try:
            import yaml
        except ImportError:
            raise RuntimeError("PyYAML not installed")
        return yaml.safe_dump(
            normalize_value(self.to_mapping()),
            sort_keys=False,
            allow_unicode=True,
            indent=indent)

    def to_toml(self, *, indent: int = 2) -> str:
        """
        Converts the object's data to a TOML string.

        TOML documents are tables, so only mapping values can be encoded.

        Args:
            indent (int): Number of spaces to be used for indentation of arrays.

        Returns:
            str: A TOML-formatted string representation of the object's data.

        Raises:
            TypeError: If the object's data is not a mapping.
        """
        value = normalize_value(self.to_mapping())
        if not isinstance(value, Mapping):
            raise TypeError(
                f"{self.__class__.__name__} cannot encode {type(value).__name__} as TOML; "
                "a top-level table is required")
        return dump_toml_to_str(value, indent)

    def serialize(self, *, fmt: str = "json", indent: int | None = None) -> str:
        """
        Serializes the object to a string in the specified format.

        Args:
            fmt (str): The format to serialize the object to. Supported formats
                are 'json', 'yaml', and 'toml'. Defaults to 'json'.
            indent (int | None): The number of spaces to use for indentation.
                YAML and TOML fall back to 2 when None.

        Returns:
            str: The serialized representation of the object in the specified format.

        Raises:
            ValueError: If the specified format is not recognized or supported.
        """
        match fmt:
            case 'json':
                return self.to_json(indent=indent)
            case 'yaml':
                return self.to_yaml(indent=indent or 2)
            case 'toml':
                return self.to_toml(indent=indent or 2)
            case _:
                raise ValueError(f"unrecognized format: {fmt}")
