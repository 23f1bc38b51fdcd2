from __future__ import annotations

import asyncio
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any

from bumblebee.cli import parse_cli
from bumblebee.helper.log_utils import configure_logging
from bumblebee.helper.multiformat_deserializable_mixin import infer_format_from_suffix, parse_text
from bumblebee.manager import Bumblebee
from bumblebee.model.config_model import DEFAULT_TABLE, BumblebeeConfig

logger = logging.getLogger(__name__)


def load_config(path: Path | None, table: str | None = None) -> BumblebeeConfig:
    """
    Loads the configuration named on the command line.

    A pyproject.toml is read from its `tool.bumblebee` table unless another
    table is named; any other file is read from its root unless a table is
    named.

    Args:
        path (Path | None): The config file, or None for defaults.
        table (str | None): The dotted table holding the settings.

    Returns:
        BumblebeeConfig: The loaded configuration.
    """
    if path is None:
        return BumblebeeConfig()
    if table is None and path.name == "pyproject.toml":
        table = DEFAULT_TABLE
    return BumblebeeConfig.from_file(path, table=table)


def load_data(source: str) -> Any:
    """
    Reads the data to transform from a file, or JSON from stdin for "-".
    """
    if source == "-":
        return parse_text(sys.stdin.read(), "json")
    path = Path(source).expanduser()
    return parse_text(path.read_text(encoding="utf-8"), infer_format_from_suffix(path))


async def transform(args: Namespace) -> str:
    """
    Runs one transformation described by parsed command-line arguments.

    Args:
        args (Namespace): The parsed arguments.

    Returns:
        str: The serialized output in the requested format.
    """
    config = load_config(args.config, args.table)
    data = load_data(args.data)

    manager = Bumblebee.create(config).transform_with(args.transformer)
    manager = manager.collection(data) if args.collection else manager.item(data)
    if args.include:
        manager.include(",".join(args.include))
    if args.serializer:
        manager.set_serializer(args.serializer)

    result = await manager.resolve()
    return result.serialize(fmt=args.format, indent=args.indent)


def run(argv: list[str] | None = None) -> str:
    """
    Command-line entrypoint: parse arguments, configure logging, transform.

    Args:
        argv (list[str] | None): Arguments, or None to use `sys.argv`.

    Returns:
        str: The text written to stdout.
    """
    args = parse_cli(argv)
    if args.version:
        from bumblebee import __version__
        return f"bumblebee {__version__}"
    if args.verbose:
        configure_logging(["stderr"], logging.DEBUG)
    logger.debug("Invoked with %s", vars(args))
    return asyncio.run(transform(args))


def main() -> None:
    """
    Main entry point of the application.

    Writes the output to stdout. Any error is reported on stderr and the
    process exits with status 1.
    """
    try:
        output = run()
    except KeyboardInterrupt:
        sys.exit(1)
    except Exception as e:
        print(f"bumblebee: error: {e}", file=sys.stderr)
        sys.exit(1)
    print(output.rstrip("\n"))


if __name__ == "__main__":  # pragma: no cover
    main()
