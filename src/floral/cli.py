"""Command line interface for floral.

Usage:
    floral Orchidaceae           # formula(e) of a family
    floral -e rosaceae           # with an explanation of each symbol
    floral -o Lamiales           # every family of an order
    floral -a                    # everything
"""

from __future__ import annotations

import argparse
import logging
import sys

from floral import __version__
from floral.dataset import DATA_ENV_VAR, load
from floral.errors import DatasetError, NotFoundError
from floral.query import QueryMode, find
from floral.ui import display_records

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="floral",
        description="Print floral formulae of flowering plant families and orders.",
    )
    parser.add_argument(
        "name",
        nargs="?",
        metavar="NAME",
        help="Flowering plant family name (or order name, with -o)",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"floral v{__version__}",
        help="Print version information only",
    )
    parser.add_argument("-a", "--all", action="store_true", help="Print all family information")
    parser.add_argument("-e", "--explain", action="store_true", help="Explain the floral formula")
    parser.add_argument("-o", "--order", action="store_true", help="Search plant orders, not families")
    parser.add_argument(
        "--data",
        metavar="PATH",
        default=None,
        help=f"Formula dataset to read (default: ${DATA_ENV_VAR} or the bundled dataset)",
    )
    parser.add_argument("--verbose", action="store_true", help="Log dataset loading to stderr")
    return parser


def query_mode(args: argparse.Namespace) -> QueryMode:
    """--all wins over a name; --order switches the field the name matches."""
    if args.all:
        return QueryMode.ALL
    if args.order:
        return QueryMode.ORDER
    return QueryMode.FAMILY


def main(argv: list[str] | None = None) -> int:
    """Run the command line. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    if args.name is None and not args.all:
        parser.print_help()
        return 0

    try:
        records = load(args.data)
    except DatasetError as err:
        print(f"floral error: {err}", file=sys.stderr)
        return 1

    mode = query_mode(args)
    try:
        matches = find(records, args.name or "", mode)
    except NotFoundError as err:
        logger.debug("No %s named %r", err.mode.value, err.key)
        message = str(err)
        if err.suggestions:
            message += f" Did you mean {err.suggestions[0]}?"
        print(message, file=sys.stderr)
        return 1

    display_records(matches, explain=args.explain)
    return 0


if __name__ == "__main__":
    sys.exit(main())
