"""
Reading input sources.

All sources are read completely and concatenated before any formatting
happens; column widths depend on every line of the input.
"""

from __future__ import annotations

import sys
from typing import BinaryIO, Sequence

from .common import vlog

STDIN_NAME = "-"


class SourceError(Exception):
    """Raised when an input source cannot be opened, read or decoded."""

    def __init__(self, source: str, reason: str):
        super().__init__(f"cannot read {source}: {reason}")
        self.source = source
        self.reason = reason


def _decode(data: bytes, source: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceError(source, f"invalid UTF-8 at byte {e.start}") from e


def read_stdin(stdin: BinaryIO | None = None) -> str:
    """Read all of standard input as UTF-8 text."""
    if stdin is None:
        stdin = sys.stdin.buffer
    try:
        data = stdin.read()
    except OSError as e:
        raise SourceError("STDIN", e.strerror or str(e)) from e
    return _decode(data, "STDIN")


def read_file(path: str) -> str:
    """Read a file as UTF-8 text, keeping line endings untouched."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise SourceError(path, e.strerror or str(e)) from e
    return _decode(data, path)


def read_sources(
    filenames: Sequence[str],
    stdin: BinaryIO | None = None,
    verbose: bool = False,
) -> str:
    """
    Read and concatenate all input sources in order.

    Args:
        filenames: Paths to read; '-' reads standard input at that position.
            An empty sequence reads standard input only.
        stdin: Binary stream used for standard input (defaults to sys.stdin)
        verbose: Enable verbose logging

    Returns:
        The concatenated text

    Raises:
        SourceError: If any source cannot be read
    """
    if not filenames:
        vlog("Reading from STDIN", verbose)
        return read_stdin(stdin)

    chunks = []
    for filename in filenames:
        if filename == STDIN_NAME:
            vlog("Reading from STDIN", verbose)
            chunks.append(read_stdin(stdin))
        else:
            vlog(f"Reading {filename}", verbose)
            chunks.append(read_file(filename))
    return "".join(chunks)
