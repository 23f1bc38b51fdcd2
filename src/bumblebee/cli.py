from __future__ import annotations

from argparse import ArgumentParser, Namespace, RawTextHelpFormatter
from pathlib import Path


def create_arg_parser() -> ArgumentParser:
    """
    Creates and configures an argument parser for the bumblebee command-line interface.

    Returns:
        ArgumentParser: An ArgumentParser object configured with all necessary options.
    """
    parser = ArgumentParser(
        prog="bumblebee",
        description="transform JSON, YAML or TOML data with a bumblebee transformer",
        formatter_class=RawTextHelpFormatter)

    parser.add_argument(
        "-c",
        "--collection",
        action="store_true",
        help="treat the data as a collection of resources (default: a single item)")

    parser.add_argument(
        "--config",
        type=Path,
        help="optional path to a config file (pyproject.toml, .json, .yaml or .toml)")

    parser.add_argument(
        "-d",
        "--data",
        type=str,
        default="-",
        metavar="PATH",
        help="data file (.json, .yaml, .yml or .toml); '-' reads JSON from stdin (default)")

    parser.add_argument(
        "-f",
        "--format",
        choices=("json", "yaml"),
        default="json",
        help="output format (default: json)")

    parser.add_argument(
        "-i",
        "--include",
        nargs="+",
        type=str,
        default=[],
        action="extend",
        metavar="INCLUDE",
        help="includes to resolve, e.g. 'author' or 'characters.actor'\n"
             " - can be repeated, space-separated or comma-separated")

    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="output indentation (default: 2)")

    parser.add_argument(
        "-s",
        "--serializer",
        type=str,
        help="serializer name, e.g. 'plain', 'data' or 'sl-data' (default: from config)")

    parser.add_argument(
        "--table",
        type=str,
        help="optional table to use for the config (defaults to 'tool.bumblebee')")

    parser.add_argument(
        "-t",
        "--transformer",
        type=str,
        metavar="MODULE:CLASS[.VARIANT]",
        help="the transformer to apply, e.g. 'myapp.transformers:BookTransformer'")

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="log resolution details to stderr")

    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="show version and exit")

    return parser


def parse_cli(argv: list[str] | None = None) -> Namespace:
    """
    Parses command-line arguments using the predefined argument parser.

    Args:
        argv (list[str] | None): The arguments to parse, or `None` to use
            `sys.argv`.

    Returns:
        Namespace: The parsed command-line arguments.
    """
    parser = create_arg_parser()
    args = parser.parse_args(argv)
    if not args.version and not args.transformer:
        parser.error("the following arguments are required: -t/--transformer")
    return args
