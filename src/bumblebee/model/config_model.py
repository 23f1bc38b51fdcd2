from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from bumblebee.helper.multiformat_model_mixin import MultiformatModelMixin
from bumblebee.helper.toml_utils import get_toml_table, load_toml_file

DEFAULT_TABLE = "tool.bumblebee"


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("", "0", "false", "no", "off"):
            return False
        raise ValueError(f"cannot interpret {value!r} as a boolean")
    return bool(value)


@dataclass(slots=True, frozen=True, kw_only=True)
class BumblebeeConfig(MultiformatModelMixin):
    """
    Process-wide settings for transformations.

    The configuration is passed explicitly to `Bumblebee.create`; nothing reads
    it from global state. It can be loaded from a `[tool.bumblebee]` table in a
    TOML file, or from a JSON, YAML or TOML document holding the same keys.

    Attributes:
        parse_request (bool): Read the include specification from the bound
            request context when the caller did not set one explicitly.
        serializer (str): Name of the default serializer.
        include_param (str): Name of the query parameter holding the include
            specification.
    """
    parse_request: bool = False
    serializer: str = "plain"
    include_param: str = "include"

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ValueError: If `serializer` or `include_param` is empty.
        """
        if not self.serializer or not self.serializer.strip():
            raise ValueError("serializer is required")
        if not self.include_param or not self.include_param.strip():
            raise ValueError("include_param is required")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], **_: Any) -> BumblebeeConfig:
        """
        Creates a configuration from a mapping. Keys may be spelled with dashes
        (`parse-request`) as is usual in TOML tables, or with underscores.

        Args:
            mapping (Mapping[str, Any]): May include "parse_request",
                "serializer" and "include_param". Missing keys take defaults.
            **_ (Any): Additional keyword arguments that are ignored.

        Returns:
            BumblebeeConfig: The validated configuration.
        """
        normalized = {str(k).replace("-", "_"): v for k, v in mapping.items()}
        return cls(
            parse_request=_to_bool(normalized.get("parse_request", False)),
            serializer=str(normalized.get("serializer", "plain")).strip(),
            include_param=str(normalized.get("include_param", "include")).strip())

    def to_mapping(self) -> dict[str, Any]:
        return {
            "parse_request": self.parse_request,
            "serializer": self.serializer,
            "include_param": self.include_param,
        }

    @classmethod
    def _preprocess_mapping(
            cls,
            mapping: Mapping[str, Any],
            *,
            fmt: str,
            path: Path | None,
            table: str | None = None,
            **_: Any) -> Mapping[str, Any]:
        """
        Selects the configuration table when a dotted `table` name is given.
        A missing table yields an empty mapping, and so the defaults.
        """
        if not table:
            return mapping
        return get_toml_table(mapping, table) or {}

    @classmethod
    def from_pyproject(cls, path: str | Path = "pyproject.toml", table: str = DEFAULT_TABLE) -> BumblebeeConfig:
        """
        Loads the configuration from a table of a TOML file such as pyproject.toml.

        Args:
            path (str | Path): The TOML file. Defaults to "pyproject.toml".
            table (str): The dotted table name. Defaults to "tool.bumblebee".

        Returns:
            BumblebeeConfig: The configuration; defaults when the table is absent.
        """
        data = load_toml_file(path)
        return cls.from_mapping(cls._preprocess_mapping(data, fmt="toml", path=Path(path), table=table))
