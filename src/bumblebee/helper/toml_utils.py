from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import tomli
import tomli_w


def load_toml_file(path: str | Path) -> dict[str, Any]:
    """
    Loads and parses a TOML file, returning its content as a dictionary.

    Args:
        path (str | Path): The path to the TOML file to be loaded.

    Returns:
        dict[str, Any]: A dictionary representation of the TOML file.

    Raises:
        FileNotFoundError: If the specified file does not exist.
        tomli.TOMLDecodeError: If the file content is not valid TOML.
    """
    with open(path, "rb") as f:
        return tomli.load(f)


def load_toml_text(text: str) -> dict[str, Any]:
    """
    Parses a TOML formatted string and converts it into a dictionary.

    Args:
        text (str): A string containing TOML formatted data.

    Returns:
        dict[str, Any]: A dictionary representation of the parsed TOML data.
    """
    return tomli.loads(text)


def get_toml_table(data: Mapping[str, Any], table: str) -> Mapping[str, Any] | None:
    """
    Walks a dotted table name (e.g. "tool.bumblebee") down a parsed TOML document.

    Args:
        data (Mapping[str, Any]): The parsed TOML document.
        table (str): The dotted name of the table to select.

    Returns:
        Mapping[str, Any] | None: The selected table, or None when any segment of
            the dotted name is missing.

    Raises:
        TypeError: If a segment exists but is not a table.
    """
    node: Any = data
    for part in table.split("."):
        if not isinstance(node, Mapping):
            raise TypeError(f"TOML key {part!r} in {table!r} is not inside a table")
        if part not in node:
            return None
        node = node[part]
    if not isinstance(node, Mapping):
        raise TypeError(f"TOML key {table!r} is not a table")
    return node


def dump_toml_to_str(data: Mapping[str, Any], indent: int = 2) -> str:
    """
    Converts a given mapping of data into a TOML string with a specified indentation.

    Args:
        data (Mapping[str, Any]): The mapping of data to be serialized into TOML format.
        indent (int, optional): The number of spaces to be used for indentation.
            Defaults to 2.

    Returns:
        str: The serialized TOML formatted string.
    """
    return tomli_w.dumps(data, indent=indent)
