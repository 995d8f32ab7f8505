"""
Command-line argument parsing for jsgettext.

This module defines the jsgettext command line and converts the parsed
arguments into a type-safe container.
"""

import argparse
from pathlib import Path
from typing import NamedTuple

from ..core.version import get_version

LANGUAGES = ("JavaScript", "EJS", "Jade", "Jinja")


class ParsedArgs(NamedTuple):
    """Type-safe container for command-line arguments."""

    files: list[Path]
    language: str
    keyword: str | None
    output: str | None
    output_dir: str | None
    join_existing: bool | None
    add_comments: bool | str | None
    sort_output: bool | None
    config_file: Path | None
    verbose: bool


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for jsgettext.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="jsgettext",
        description="Extract gettext messages from JavaScript and template sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s app.js lib/util.js                  # Write messages.po
  %(prog)s -o - app.js                         # Print the catalog
  %(prog)s -L EJS -p locale -o app.pot views/*.ejs
  %(prog)s -j -o locale/app.pot app.js         # Update an existing catalog
  %(prog)s -c L10n app.js                      # Keep comments tagged L10n
        """,
    )

    _ = parser.add_argument("files", nargs="+", type=Path, metavar="FILE", help="Source files to scan")

    _ = parser.add_argument(
        "-L",
        "--language",
        choices=LANGUAGES,
        default="JavaScript",
        help="Dialect of the input files (default: JavaScript)",
    )

    _ = parser.add_argument("-k", "--keyword", default=None, help="Additional keyword to look for")

    _ = parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Output file name, or - for standard output (default: messages.po)",
    )

    _ = parser.add_argument("-p", "--output-dir", default=None, help="Output files will be placed in this directory")

    _ = parser.add_argument(
        "-j",
        "--join-existing",
        action="store_true",
        default=None,
        help="Join messages with the existing output file",
    )

    _ = parser.add_argument(
        "-c",
        "--add-comments",
        nargs="?",
        const=True,
        default=None,
        metavar="TAG",
        help="Place comment blocks (optionally only those containing TAG) preceding keyword lines in the output",
    )

    _ = parser.add_argument(
        "-s",
        "--sort-output",
        action="store_true",
        default=None,
        help="Generate sorted output",
    )

    _ = parser.add_argument("--config", type=Path, default=None, help="YAML file with extraction options")

    _ = parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")

    _ = parser.add_argument("--version", action="version", version=f"%(prog)s {get_version()}")

    return parser


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments in a type-safe container
    """
    args = create_argument_parser().parse_args(argv)

    # Convert to type-safe container - argparse returns Any types
    return ParsedArgs(
        files=args.files,  # pyright: ignore[reportAny]
        language=args.language,  # pyright: ignore[reportAny]
        keyword=args.keyword,  # pyright: ignore[reportAny]
        output=args.output,  # pyright: ignore[reportAny]
        output_dir=args.output_dir,  # pyright: ignore[reportAny]
        join_existing=args.join_existing,  # pyright: ignore[reportAny]
        add_comments=args.add_comments,  # pyright: ignore[reportAny]
        sort_output=args.sort_output,  # pyright: ignore[reportAny]
        config_file=args.config,  # pyright: ignore[reportAny]
        verbose=args.verbose,  # pyright: ignore[reportAny]
    )


def option_overrides(args: ParsedArgs) -> dict[str, object]:
    """
    Collect the extraction options given explicitly on the command line.

    Options left unset are omitted so values from an options file, or the
    defaults, apply to them.
    """
    candidates: dict[str, object] = {
        "keyword": args.keyword,
        "output": args.output,
        "output_dir": args.output_dir,
        "join_existing": args.join_existing,
        "add_comments": args.add_comments,
        "sort_output": args.sort_output,
    }
    return {key: value for key, value in candidates.items() if value is not None}
