from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from typing_extensions import Self

from bumblebee.helper.toml_utils import load_toml_text


def infer_format_from_suffix(path: Path) -> str:
    """
    Infers the text format based on the suffix of the given file path.

    Args:
        path (Path): The file path to infer the format from.

    Returns:
        str: The inferred format as a string ("json", "yaml", or "toml").

    Raises:
        ValueError: If the file suffix is not recognized as a supported format.
    """
    suffix = path.suffix.lower()
    match suffix:
        case ".json":
            return "json"
        case ".yaml" | ".yml":
            return "yaml"
        case ".toml":
            return "toml"
        case _:
            raise ValueError(f"Cannot infer format from extension {suffix!r}")


def parse_text(text: str, fmt: str) -> Any:
    """
    Parses text content into a data structure based on the specified format.

    Args:
        text (str): The text content to be parsed.
        fmt (str): The format of the text content. Supported values are
            "json", "yaml", and "toml". Case is ignored.

    Returns:
        Any: The parsed data structure derived from the input text. Empty input
            parses to an empty mapping.

    Raises:
        RuntimeError: If the format is "yaml" and the PyYAML library is not installed.
        ValueError: If the format is unrecognized or unsupported.
    """
    fmt = fmt.lower()
    match fmt:
        case "json":
            import json
            return json.loads(text or "{}")
        case "yaml":
            try:
                import yaml
            except ImportError:
                raise RuntimeError("PyYAML not installed")
            parsed = next(iter(yaml.safe_load_all(text)), None)
            return {} if parsed is None else parsed
        case "toml":
            return load_toml_text(text or "")
        case _:
            raise ValueError(f"unrecognized format: {fmt!r}")


class MultiformatDeserializableMixin:
    """
    A mixin class that provides deserialization capabilities from JSON, YAML, and TOML.

    Subclasses must implement `from_mapping`. `_preprocess_mapping` is a hook for
    reshaping the parsed document (for example selecting a nested table) before the
    instance is built.
    """

    @classmethod
    def from_mapping(cls: type[Self], mapping: Mapping[str, Any], **_: Any) -> Self:
        """
        Creates an instance of the class from a given mapping. Subclasses must
        override this method.

        Args:
            mapping (Mapping[str, Any]): A collection that maps strings to values.
            **_ (Any): Additional keyword arguments for extensibility in derived implementations.

        Raises:
            NotImplementedError: Raised if this base method is not overridden by a subclass.
        """
        raise NotImplementedError(
            f"{cls.__name__} must implement from_mapping(mapping, **kwargs) "
            "to use MultiformatDeserializableMixin.")

    @classmethod
    def deserialize(cls: type[Self], text: str, *, fmt: str = "json", **context: Any) -> Self:
        """
        Deserializes a given text representation into an instance of the class.

        Args:
            text (str): The string representation of the object to be deserialized.
            fmt (str, optional): The format in which the input text is given. Defaults to "json".
            **context (Any): Additional context passed to the hooks and to `from_mapping`.

        Returns:
            Self: An instance of the class created using the deserialized data.
        """
        raw = parse_text(text, fmt)
        mapping = cls._coerce_root_mapping(raw, fmt=fmt, path=None)
        mapping = cls._preprocess_mapping(mapping, fmt=fmt, path=None, **context)
        return cls.from_mapping(mapping, **context)

    @classmethod
    def from_file(cls: type[Self], path: str | Path, fmt: str | None = None, **context: Any) -> Self:
        """
        Creates an instance of the class from a file specified by the provided path.

        Args:
            path (str | Path): The file's path.
            fmt (str | None): The format of the file content. If None, the format is
                inferred from the file's suffix.
            **context (Any): Additional context passed to the hooks and to `from_mapping`.

        Returns:
            Self: An instance of the class.
        """
        p = Path(path)
        text = p.read_text(encoding="utf-8")
        fmt = fmt or infer_format_from_suffix(p)
        raw = parse_text(text, fmt)
        mapping = cls._coerce_root_mapping(raw, fmt=fmt, path=p)
        mapping = cls._preprocess_mapping(mapping, fmt=fmt, path=p, **context)
        return cls.from_mapping(mapping, **context)

    # ---- overridable hooks ----

    @classmethod
    def _coerce_root_mapping(cls, raw: Any, *, fmt: str, path: Path | None) -> Mapping[str, Any]:
        """
        Ensures the parsed document is a mapping.

        Raises:
            TypeError: If the provided input is not a mapping type.
        """
        if isinstance(raw, Mapping):
            return raw
        raise TypeError(
            f"{cls.__name__} expected top-level mapping, got {type(raw)!r} "
            f"from {fmt} {str(path) if path else '<inline>'}")

    @classmethod
    def _preprocess_mapping(
            cls,
            mapping: Mapping[str, Any],
            *,
            fmt: str,
            path: Path | None,
            **_: Any) -> Mapping[str, Any]:
        """
        Preprocesses the parsed mapping before the instance is built. By default,
        it passes the mapping through unchanged.

        Args:
            mapping (Mapping[str, Any]): The input mapping to preprocess.
            fmt (str): The format the mapping was parsed from.
            path (Path | None): The source file, if any.
            **_ (Any): Additional context, ignored by default.

        Returns:
            Mapping[str, Any]: The processed mapping.
        """
        return mapping
