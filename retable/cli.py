"""
Command-line interface for retable.

Usage:
    retable data.txt                    # Align columns split on whitespace
    retable --column-token , data.csv   # Split on commas
    retable --column-token '\\t' a.tsv  # Split on tabs
    retable -c notes.txt                # Keep '#' comments out of the widths
    cmd | retable | less                # Read from STDIN
"""

from __future__ import annotations

import argparse
import io
import os
import sys
from typing import BinaryIO, Sequence, TextIO

from . import __version__
from .common import decode_escapes
from .config import DEFAULT_COMMENT_TOKEN, ConfigError, load_config
from .logging_config import get_logger, setup_logging
from .render import retable
from .sources import SourceError, read_sources


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="retable",
        description="Re-format delimited text into aligned columns.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    split = parser.add_mutually_exclusive_group()
    split.add_argument(
        "--column-token",
        metavar="CHAR",
        help="Split columns using this character (escapes such as '\\t' are decoded)",
    )
    split.add_argument(
        "--by-whitespace",
        action="store_true",
        help="Split columns using any consecutive whitespace (default)",
    )
    parser.add_argument(
        "--padding",
        metavar="CHAR",
        help="Character to use as padding when printing the table [default: ' ']",
    )
    parser.add_argument(
        "--width",
        type=int,
        metavar="N",
        help="Number of padding characters to add between columns [default: 2]",
    )

    comments = parser.add_mutually_exclusive_group()
    comments.add_argument(
        "--comment-token",
        metavar="TOKEN",
        help="Ignore text following this token; comments are still printed, "
             "but do not influence indentation",
    )
    comments.add_argument(
        "-c", "--comments",
        action="store_true",
        help=f"Same as --comment-token '{DEFAULT_COMMENT_TOKEN}'",
    )

    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Read option defaults from this YAML or JSON file",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output on STDERR",
    )
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Also write all diagnostics, including debug output, to this file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "filenames",
        nargs="*",
        metavar="FILE",
        help="One or more text files to re-format; '-' reads STDIN. Text is read "
             "from STDIN if no files are specified and STDIN is not a terminal",
    )
    return parser


def _utf8_stdout() -> TextIO:
    """Switch stdout to UTF-8 without newline translation, whatever the locale."""
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding="utf-8", newline="\n")
    return sys.stdout


def _silence_stdout() -> None:
    """Point stdout at /dev/null so the final flush at exit cannot fail."""
    devnull = os.open(os.devnull, os.O_WRONLY)
    os.dup2(devnull, sys.stdout.fileno())
    os.close(devnull)


def main(
    argv: Sequence[str] | None = None,
    stdin: BinaryIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Main entry point; returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(log_file=args.log_file, verbose=args.verbose)
    except OSError as e:
        parser.error(f"Could not open log file {args.log_file}: {e.strerror}")
    logger = get_logger()

    comment_token = DEFAULT_COMMENT_TOKEN if args.comments else args.comment_token
    try:
        defaults = load_config(args.config, verbose=args.verbose)
        config = defaults.build(
            column_token=None if args.column_token is None else decode_escapes(args.column_token),
            by_whitespace=args.by_whitespace,
            comment_token=comment_token,
            padding=None if args.padding is None else decode_escapes(args.padding),
            width=args.width,
            filenames=tuple(args.filenames),
        )
    except ConfigError as e:
        parser.error(str(e))

    logger.debug(f"Using {config}")

    if stdin is None:
        stdin = sys.stdin.buffer
    if not config.filenames and stdin.isatty():
        parser.print_usage(sys.stderr)
        return 0

    try:
        text = read_sources(config.filenames, stdin=stdin, verbose=args.verbose)
    except SourceError as e:
        logger.error(str(e))
        return 1

    out = _utf8_stdout() if stdout is None else stdout
    try:
        completed = retable(text, config, out)
    except OSError as e:
        logger.error(f"Error retabling file: {e}")
        return 1

    if not completed and out is sys.stdout:
        _silence_stdout()

    return 0


def run() -> None:
    """Console script entry point."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
