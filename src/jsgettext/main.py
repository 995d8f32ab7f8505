"""
Command-line entry point for jsgettext.

This module sets up logging, resolves the extraction options from the
command line and an optional options file, reads the named source files,
runs the extraction and writes the resulting catalog.
"""

import logging
import sys
from pathlib import Path

from .config.manager import load_options_file
from .config.schema import ExtractOptions
from .extraction.extractor import Dialect, extract_with_dialect
from .utils.cli.args import ParsedArgs, option_overrides, parse_arguments
from .utils.core.exceptions import JsGettextError

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: Enable verbose logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def resolve_options(args: ParsedArgs) -> ExtractOptions:
    """
    Merge options file values with explicit command-line values.

    Raises:
        ConfigurationError: If the options file or the merged options are invalid
    """
    overrides = option_overrides(args)
    if args.config_file is not None:
        return load_options_file(args.config_file, overrides)
    return ExtractOptions.from_value(overrides)


def read_sources(files: list[Path]) -> dict[str, str]:
    """
    Read source files in command-line order.

    Returns:
        File paths, as given, mapped to their text

    Raises:
        OSError: If a file cannot be read
    """
    sources: dict[str, str] = {}
    for path in files:
        sources[path.as_posix()] = path.read_text(encoding="utf-8")
    return sources


def write_catalog(content: str, options: ExtractOptions) -> Path | None:
    """
    Write the catalog to ``output-dir/output``, or to stdout for ``-``.

    Returns:
        The written path, or None when written to stdout
    """
    if options.output == "-":
        _ = sys.stdout.write(content)
        return None

    output_file = Path(options.output_dir or "") / options.output
    output_file.parent.mkdir(parents=True, exist_ok=True)
    _ = output_file.write_text(content, encoding="utf-8")
    return output_file


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the jsgettext command.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        options = resolve_options(args)
        sources = read_sources(args.files)
        content = extract_with_dialect(sources, Dialect.from_value(args.language), options)
        output_file = write_catalog(content, options)
    except JsGettextError as e:
        logger.error(f"String extraction failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Error reading or writing files: {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1

    if output_file is not None:
        logger.info(f"Generated catalog: {output_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
